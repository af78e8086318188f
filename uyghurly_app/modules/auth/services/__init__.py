from .auth_service import (
    AuthService,
    GUEST_STORAGE_KEY,
    ensure_accounts_available,
    get_google_verifier,
    get_login_throttle,
)
from .google_verifier import GoogleTokenVerifier
from .login_throttle import LoginThrottle

__all__ = [
    'AuthService',
    'GUEST_STORAGE_KEY',
    'GoogleTokenVerifier',
    'LoginThrottle',
    'ensure_accounts_available',
    'get_google_verifier',
    'get_login_throttle',
]

"""Authentication error codes and the messages shown to learners."""

from typing import Optional

from uyghurly_app.core.error_handlers import (
    AuthenticationError,
    ConflictError,
    FeatureUnavailableError,
    RateLimitError,
    UyghurlyError,
    ValidationError,
)

LOGIN = 'login'
SIGNUP = 'signup'
GOOGLE = 'google'

USER_NOT_FOUND = 'auth/user-not-found'
WRONG_PASSWORD = 'auth/wrong-password'
INVALID_EMAIL = 'auth/invalid-email'
INVALID_CREDENTIAL = 'auth/invalid-credential'
TOO_MANY_REQUESTS = 'auth/too-many-requests'
NETWORK_REQUEST_FAILED = 'auth/network-request-failed'
EMAIL_ALREADY_IN_USE = 'auth/email-already-in-use'
WEAK_PASSWORD = 'auth/weak-password'
POPUP_CLOSED_BY_USER = 'auth/popup-closed-by-user'
ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL = 'auth/account-exists-with-different-credential'
USERNAME_TAKEN = 'auth/username-taken'

MESSAGES = {
    USER_NOT_FOUND: 'No account found with this email. Please sign up first.',
    WRONG_PASSWORD: 'Incorrect password. Please try again.',
    INVALID_EMAIL: 'Invalid email address.',
    INVALID_CREDENTIAL: 'Invalid credentials. Please check your email and password.',
    TOO_MANY_REQUESTS: 'Too many failed attempts. Please try again later.',
    NETWORK_REQUEST_FAILED: 'Network error. Please check your internet connection.',
    EMAIL_ALREADY_IN_USE: 'An account with this email already exists. Please sign in instead.',
    WEAK_PASSWORD: ('Password should be at least 8 characters long and contain numbers, '
                    'letters, and capital letters.'),
    POPUP_CLOSED_BY_USER: 'Sign in was cancelled.',
    ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL: (
        'An account with this email already exists with a different sign-in method.'),
    USERNAME_TAKEN: 'This username is already taken. Please choose a different username.',
}

# Sign-up words the credential failure differently.
OPERATION_MESSAGES = {
    (SIGNUP, INVALID_CREDENTIAL): 'Invalid credentials provided.',
}

# Google sign-in only explains these; anything else gets the generic message.
GOOGLE_CODES = (POPUP_CLOSED_BY_USER, ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL)

# Which API error family each code belongs to; unlisted codes are bad input.
ERROR_TYPES = {
    USER_NOT_FOUND: AuthenticationError,
    WRONG_PASSWORD: AuthenticationError,
    INVALID_CREDENTIAL: AuthenticationError,
    ACCOUNT_EXISTS_WITH_DIFFERENT_CREDENTIAL: ConflictError,
    EMAIL_ALREADY_IN_USE: ConflictError,
    USERNAME_TAKEN: ConflictError,
    TOO_MANY_REQUESTS: RateLimitError,
    NETWORK_REQUEST_FAILED: FeatureUnavailableError,
}


def message_for(code: str, operation: str = LOGIN, detail: Optional[str] = None) -> str:
    """Learner-facing message for ``code``; unknown codes get a generic one."""
    if operation == GOOGLE:
        return MESSAGES[code] if code in GOOGLE_CODES else 'Google sign in failed. Please try again.'
    message = OPERATION_MESSAGES.get((operation, code)) or MESSAGES.get(code)
    if message:
        return message
    if operation == SIGNUP:
        return f'Account creation failed: {detail or "Please try again."}'
    return f'Login failed: {detail or "Please try again."}'


class AuthError(UyghurlyError):
    """Failed sign-in or sign-up, carrying the ``auth/...`` code."""

    def __init__(self, code: str, operation: str = LOGIN, detail: Optional[str] = None):
        super().__init__(
            message=message_for(code, operation, detail),
            code=code,
            status_code=ERROR_TYPES.get(code, ValidationError).status_code,
        )
        self.operation = operation

from .user_service import UserService
from .account_service import AccountService

__all__ = ['UserService', 'AccountService']

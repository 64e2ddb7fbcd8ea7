# Utils package initialization
# Contains validation, security and error helpers

from .validators import validate_email, validate_password, validate_phone, validate_required_fields
from .passwords import PasswordHasher
from .tokens import InvalidToken, TokenPair, TokenService
from .errors import ApiError, register_error_handlers

__all__ = [
    'validate_email', 'validate_password', 'validate_phone', 'validate_required_fields',
    'PasswordHasher',
    'InvalidToken', 'TokenPair', 'TokenService',
    'ApiError', 'register_error_handlers',
]

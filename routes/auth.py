"""
Authentication Routes
Handles signup, login, token refresh and the bearer-token access gate
"""

from __future__ import annotations
from functools import wraps
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, current_app, g, jsonify, request
from pymongo.errors import DuplicateKeyError

from models.user import User, UserRole, role_satisfies
from utils.errors import (
    Conflict,
    Forbidden,
    ServiceUnavailable,
    Unauthenticated,
    ValidationError,
)
from utils.passwords import PasswordHasher
from utils.tokens import InvalidToken, TokenService
from utils.validators import (
    validate_email,
    validate_password,
    validate_phone,
    validate_required_fields,
)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

INVALID_CREDENTIALS = 'Invalid email or password'
SIGNUP_ROLES = {UserRole.CUSTOMER.value, UserRole.SELLER.value}


def _get_users_collection():
    """Get MongoDB users collection"""
    users = current_app.config.get('db_users')
    if users is None:
        raise ServiceUnavailable()
    return users


def get_token_service() -> TokenService:
    return current_app.config['token_service']


def get_password_hasher() -> PasswordHasher:
    return current_app.config['password_hasher']


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise ValidationError('No data provided')
    return data


def _clean(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ''


def find_user_by_id(user_id: str, include_password: bool = False) -> Optional[dict]:
    """Load a user document by its string id; None for unknown or malformed ids"""
    try:
        object_id = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    projection = None if include_password else {'password_hash': 0}
    return _get_users_collection().find_one({'_id': object_id}, projection)


# Access gate

def _extract_bearer_token() -> str:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    token = token.strip()
    if scheme != 'Bearer' or not token:
        current_app.logger.warning('No bearer token provided for %s', request.path)
        raise Unauthenticated('Not authorized, no token')
    return token


def resolve_current_user() -> User:
    """Resolve the request's bearer token to a User (without password hash)"""
    token = _extract_bearer_token()

    try:
        user_id = get_token_service().verify_access_token(token)
    except InvalidToken as e:
        current_app.logger.warning('Token verification failed: %s', e)
        raise Unauthenticated('Not authorized, token failed') from e

    user_doc = find_user_by_id(user_id)
    if not user_doc:
        # Account removed after the token was issued
        current_app.logger.warning('User %s not found for token', user_id)
        raise Unauthenticated('Not authorized, token failed')

    return User.from_dict(user_doc)


def require_roles(*roles: UserRole):
    """
    Decorator factory: authenticate the request and, when roles are given,
    require one of them. Admin satisfies any role requirement.
    The resolved user is available as ``g.current_user``.
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            user = resolve_current_user()
            if roles and not role_satisfies(user.role, roles):
                current_app.logger.warning(
                    'Unauthorized %s access attempt by %s',
                    '/'.join(role.value for role in roles),
                    user.email,
                )
                raise Forbidden(f"Not authorized as {' or '.join(role.value for role in roles)}")
            g.current_user = user
            return f(*args, **kwargs)
        return decorated
    return decorator


require_auth = require_roles()
require_seller = require_roles(UserRole.SELLER)
require_admin = require_roles(UserRole.ADMIN)


def get_current_user() -> User:
    return g.current_user


def _auth_response(user: User) -> dict:
    tokens = get_token_service().issue_token_pair(user._id)
    return {
        'ok': True,
        'data': user.to_public_dict(),
        'accessToken': tokens.access_token,
        'refreshToken': tokens.refresh_token,
    }


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """
    Register a new user
    Required fields: fullName, email, password, phoneNumber
    Optional fields: role (customer|seller), businessName, gstNumber, businessAddress
    """
    data = _json_body()

    is_valid, missing = validate_required_fields(data, ['fullName', 'email', 'password', 'phoneNumber'])
    if not is_valid:
        current_app.logger.warning('Missing required fields in signup')
        raise ValidationError('Please provide all required fields', errors=missing)

    full_name = _clean(data, 'fullName')
    if not full_name:
        raise ValidationError('Full name is required')

    email = _clean(data, 'email').lower()
    is_valid, error = validate_email(email)
    if not is_valid:
        raise ValidationError(error)

    password = data.get('password')
    if not isinstance(password, str):
        raise ValidationError('Password is required')
    is_valid, errors = validate_password(password)
    if not is_valid:
        raise ValidationError(errors[0], errors=errors)

    phone_number = _clean(data, 'phoneNumber')
    is_valid, error = validate_phone(phone_number)
    if not is_valid:
        raise ValidationError(error)

    role = _clean(data, 'role') or UserRole.CUSTOMER.value
    if role not in SIGNUP_ROLES:
        raise ValidationError('Invalid role')

    users_collection = _get_users_collection()
    duplicate = Conflict('Email already registered', status_code=400)
    if users_collection.find_one({'email': email}, {'_id': 1}):
        current_app.logger.warning('Signup attempt with existing email: %s', email)
        raise duplicate

    user = User(
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        password_hash=get_password_hasher().hash(password),
        role=UserRole(role),
        business_name=_clean(data, 'businessName') or None,
        gst_number=_clean(data, 'gstNumber') or None,
        business_address=_clean(data, 'businessAddress') or None,
    )

    try:
        result = users_collection.insert_one(user.to_dict(include_password=True))
    except DuplicateKeyError as e:
        # Lost a race against a concurrent signup with the same email
        raise duplicate from e
    user._id = str(result.inserted_id)

    current_app.logger.info('New user registered: %s', email)
    return jsonify(_auth_response(user)), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login with email and password, returns tokens and user info"""
    data = _json_body()

    email = _clean(data, 'email').lower()
    password = data.get('password')
    if not email or not isinstance(password, str) or not password:
        raise ValidationError('Email and password required')

    user_doc = _get_users_collection().find_one({'email': email})
    # Same answer for unknown email and wrong password
    if not user_doc or not get_password_hasher().verify(password, user_doc.get('password_hash', '')):
        current_app.logger.warning('Failed login attempt for: %s', email)
        raise Unauthenticated(INVALID_CREDENTIALS)

    user = User.from_dict(user_doc)
    current_app.logger.info('User logged in: %s', email)
    return jsonify(_auth_response(user))


@auth_bp.route('/refresh', methods=['POST'])
def refresh():
    """Exchange a refresh token for a new access token (refresh token is not rotated)"""
    data = request.get_json(silent=True) or {}
    token = data.get('refreshToken') if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        raise ValidationError('Refresh token required')

    token_service = get_token_service()
    try:
        user_id = token_service.verify_refresh_token(token)
    except InvalidToken as e:
        current_app.logger.warning('Token refresh failed: %s', e)
        raise Unauthenticated('Invalid refresh token') from e

    if not find_user_by_id(user_id):
        raise Unauthenticated('Invalid refresh token')

    return jsonify({
        'ok': True,
        'accessToken': token_service.issue_access_token(user_id),
    })


@auth_bp.route('/me', methods=['GET'])
@require_auth
def me():
    """Return the authenticated user's public info"""
    return jsonify({'ok': True, 'data': get_current_user().to_public_dict()})

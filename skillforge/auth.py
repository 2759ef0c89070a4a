import jwt
from functools import wraps
from flask import g, request
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from skillforge import bcrypt, store
from skillforge.errors import AuthenticationError, NotFoundError


def hash_password(password):
    """
    Salted one-way bcrypt hash of a plaintext password.
    """
    return bcrypt.generate_password_hash(password).decode('utf-8')


def verify_password(password, password_hash):
    if not password or not password_hash:
        return False
    return bcrypt.check_password_hash(password_hash, password)


def issue_token(user_id):
    """
    Generate a signed access token for the given user id.
    Expiry comes from JWT_ACCESS_TOKEN_EXPIRES (7 days unless configured).
    """
    return create_access_token(identity=str(user_id))


def verify_token(token):
    """
    Decode and verify the token, returning the user id it was issued for.
    """
    if not token:
        raise AuthenticationError('Access denied. No token provided.')
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise AuthenticationError('Token has expired.')
    except (jwt.InvalidTokenError, JWTExtendedException):
        raise AuthenticationError('Invalid token.')

    try:
        return int(payload['sub'])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError('Invalid token.')


def bearer_token():
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    return header[len('Bearer '):].strip() or None


def login_required(f):
    """
    Decorator to protect endpoints with authentication.
    The authenticated user is available as ``g.current_user``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user_id = verify_token(bearer_token())

        try:
            user = store.get_user(user_id)
        except NotFoundError:
            raise AuthenticationError('Invalid token. User not found.')

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function

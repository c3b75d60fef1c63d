import functools
from datetime import datetime, timedelta, timezone
from typing import Dict, Tuple

import jwt
from chalice.app import Request
from werkzeug.security import check_password_hash, generate_password_hash

from chalicelib.constants.constants import TOKEN_HEADER
from chalicelib.utils import exceptions as utils_exceptions
from chalicelib.utils.logger import log_request, logger, bind_request_id

TOKEN_ALGORITHM = 'HS256'


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def _get_secret_key(context) -> str:
    if not context.secret_key:
        raise utils_exceptions.ApiException('SECRET_KEY is not configured')
    return context.secret_key


def generate_all_tokens(context, email, first_name, last_name, uid) -> Tuple[str, str]:
    """
    Issues a signed access token and a refresh token for the user
    """
    secret_key = _get_secret_key(context)
    now = datetime.now(tz=timezone.utc)
    claims = {
        'email': email,
        'first_name': first_name,
        'last_name': last_name,
        'uid': uid,
        'type': 'access',
        'exp': now + timedelta(hours=context.access_token_ttl_hours)
    }
    refresh_claims = {
        'uid': uid,
        'type': 'refresh',
        'exp': now + timedelta(hours=context.refresh_token_ttl_hours)
    }
    token = jwt.encode(claims, secret_key, algorithm=TOKEN_ALGORITHM)
    refresh_token = jwt.encode(refresh_claims, secret_key, algorithm=TOKEN_ALGORITHM)
    return token, refresh_token


def validate_token(context, signed_token: str) -> Dict:
    if not signed_token:
        raise utils_exceptions.NotAuthorizedException('No auth header provided')
    try:
        claims = jwt.decode(signed_token, _get_secret_key(context), algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise utils_exceptions.NotAuthorizedException('Token is expired')
    except jwt.InvalidTokenError as error:
        raise utils_exceptions.NotAuthorizedException(f'Token is invalid: {error}')
    if claims.get('type') != 'access':
        raise utils_exceptions.NotAuthorizedException('Token is not an access token')
    return claims


def authenticate_request(request: Request, context) -> Dict:
    bind_request_id(request)
    log_request(request)
    claims = validate_token(context, request.headers.get(TOKEN_HEADER))
    auth_result = {
        'user_id': claims.get('uid'),
        'email': claims.get('email'),
        'first_name': claims.get('first_name'),
        'last_name': claims.get('last_name')
    }
    setattr(request, 'auth_result', auth_result)
    logger.info(f"authenticate_request ::: SUCCESS, user_id={auth_result['user_id']}")
    return auth_result


def authenticate(func):
    """
    Wrapper for functions which require user's authentication,
    the wrapped function is called as func(request, context, ...)
    """

    @functools.wraps(func)
    def result_auth(request, context, *args, **kwargs):
        authenticate_request(request, context)
        return func(request, context, *args, **kwargs)

    return result_auth


def authenticate_class(func):
    """
    Wrapper for class methods which require user's authentication,
    the wrapped method is called as func(cls, request, context, ...)
    """

    @functools.wraps(func)
    def result_auth(cls, request, context, *args, **kwargs):
        authenticate_request(request, context)
        return func(cls, request, context, *args, **kwargs)

    return result_auth

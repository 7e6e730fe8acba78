"""
Auth gate: resolves the auth cookie on a request to a live user

The gate is wired into Flask-Login as a request loader (see app.py), so
every view decorated with @login_required runs the same check.
"""
import logging
from collections import namedtuple

from flask import current_app, g

from models import db, User

logger = logging.getLogger(__name__)

# Rejection reasons, also used as the 401 message
MISSING_TOKEN = 'Not authenticated'
INVALID_TOKEN = 'Invalid or expired token'
UNKNOWN_USER = 'User not found'


class AuthResult(namedtuple('AuthResult', ['user', 'reason'])):
    """Outcome of the gate: either an authorized user or a rejection reason"""

    @property
    def authorized(self):
        return self.user is not None

    @classmethod
    def accept(cls, user):
        return cls(user, None)

    @classmethod
    def reject(cls, reason):
        return cls(None, reason)


def get_token_service():
    return current_app.extensions['tokens']


def get_auth_token(request):
    return request.cookies.get(current_app.config['AUTH_COOKIE_NAME']) or None


def authenticate_request(request):
    token = get_auth_token(request)
    if not token:
        return AuthResult.reject(MISSING_TOKEN)

    user_id = get_token_service().verify(token)
    if user_id is None:
        return AuthResult.reject(INVALID_TOKEN)

    user = db.session.get(User, user_id)
    if user is None:
        logger.warning(f'Token for unknown user id {user_id}')
        return AuthResult.reject(UNKNOWN_USER)

    return AuthResult.accept(user)


def load_user_from_request(request):
    """Flask-Login request_loader; remembers the rejection for the 401 handler"""
    result = authenticate_request(request)
    if not result.authorized:
        g.auth_rejection = result.reason
        return None
    return result.user


def set_auth_cookie(response, user):
    config = current_app.config
    token = get_token_service().issue(user.id)
    response.set_cookie(
        config['AUTH_COOKIE_NAME'],
        token,
        max_age=config['TOKEN_MAX_AGE'],
        path='/',
        httponly=True,
        secure=config['AUTH_COOKIE_SECURE'],
        samesite='Strict',
    )
    return response


def clear_auth_cookie(response):
    config = current_app.config
    response.set_cookie(
        config['AUTH_COOKIE_NAME'],
        '',
        max_age=0,
        expires=0,
        path='/',
        httponly=True,
        secure=config['AUTH_COOKIE_SECURE'],
        samesite='Strict',
    )
    return response

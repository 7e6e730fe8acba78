"""
Signed session tokens (HS256 JWT) carried in the auth cookie
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'
DEFAULT_MAX_AGE = 24 * 60 * 60


class TokenService:
    """Issues and verifies tokens that embed a user id

    verify() never raises on bad input: it returns None for tampered,
    expired or malformed tokens so callers can treat it as a plain outcome.
    """

    def __init__(self, secret, max_age=DEFAULT_MAX_AGE):
        if not secret:
            raise ValueError('A signing secret is required')
        self.secret = secret
        self.max_age = max_age

    def issue(self, user_id, now=None):
        now = now or datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'iat': now,
            'exp': now + timedelta(seconds=self.max_age),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token):
        """Return the user id embedded in token, or None"""
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={'require': ['sub', 'exp']},
            )
        except jwt.ExpiredSignatureError:
            logger.info('Rejected expired token')
            return None
        except jwt.InvalidTokenError as e:
            logger.info(f'Rejected invalid token: {e}')
            return None

        try:
            return int(payload['sub'])
        except (TypeError, ValueError):
            logger.info('Rejected token with non-numeric subject')
            return None

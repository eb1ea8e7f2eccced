"""Authentication token issuing and verification.

Tokens are signed, timestamped payloads ``{"userId": ..., "email": ...}``.
Password handling and user accounts live outside taskflow; this service only
turns a credential token into an authenticated identity.
"""

import logging

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError

from src.core.config import settings
from src.core.errors import InvalidTokenError
from src.domain.user import AuthenticatedUser


logger = logging.getLogger(__name__)

TOKEN_SALT = "taskflow-auth"


class AuthProvider:
    """Issues and verifies signed authentication tokens."""

    def __init__(self, secret_key: str, *, max_age_seconds: int | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self._max_age = max_age_seconds if max_age_seconds is not None else settings.token_max_age_seconds

    def issue_token(self, *, user_id: str, email: str) -> str:
        """Sign a token for ``user_id``."""
        return self._serializer.dumps({"userId": user_id, "email": email})

    def verify_token(self, token: str) -> AuthenticatedUser:
        """Verify a token and return the identity it carries.

        Raises:
            InvalidTokenError: If the signature is bad, the token expired, or the payload is malformed
        """
        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired as err:
            logger.info("auth_token_expired")
            raise InvalidTokenError from err
        except BadSignature as err:
            logger.warning("auth_token_bad_signature")
            raise InvalidTokenError from err

        try:
            return AuthenticatedUser.model_validate(payload)
        except ValidationError as err:
            logger.warning("auth_token_malformed_payload")
            raise InvalidTokenError from err


def get_auth_provider() -> AuthProvider:
    """Build the provider from settings, failing fast when no secret is configured."""
    secret_key = settings.require_credential("secret_key", "Secret key for token signing")
    return AuthProvider(secret_key, max_age_seconds=settings.token_max_age_seconds)

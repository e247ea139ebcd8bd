from datetime import timedelta

import structlog
from jose import JWTError, jwt

from duochat.core.core import Service
from duochat.core.modules.session.models import TOKEN_ALGORITHM, AuthToken
from duochat.errors import AuthenticationError, ConfigurationError
from duochat.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies signed, expiring session tokens."""

    def _signing_key(self) -> str:
        key = self.core.config.session_secret_key
        if not key:
            raise ConfigurationError("JWT Secret not configured")
        return key

    def issue_token(self, identity: str) -> AuthToken:
        """Create a token naming ``identity`` that expires after the configured TTL."""
        expires_at = now() + timedelta(days=self.core.config.session_ttl_days)
        claims = {"username": identity, "exp": int(expires_at.timestamp())}
        return AuthToken(jwt.encode(claims, self._signing_key(), algorithm=TOKEN_ALGORITHM))

    def verify_token(self, token: str | None) -> str:
        """Return the identity a token was issued to.

        Raises:
            AuthenticationError: If the token is missing, invalid, expired or names an unknown identity
        """
        if not token:
            raise AuthenticationError
        try:
            key = self._signing_key()
        except ConfigurationError:
            logger.error("session_secret_missing")
            raise AuthenticationError from None

        try:
            claims = jwt.decode(token, key, algorithms=[TOKEN_ALGORITHM])
        except JWTError as e:
            logger.debug("session_token_rejected", error=str(e))
            raise AuthenticationError from None

        identity = claims.get("username")
        if identity not in self.core.config.identities:
            raise AuthenticationError
        return str(identity)

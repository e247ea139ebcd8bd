import structlog

from duochat.core.core import Service
from duochat.core.modules.otp.verifier import verify_code
from duochat.errors import AuthenticationError, ConfigurationError

logger = structlog.get_logger(__name__)


class OtpService(Service):
    """Maps a submitted TOTP code to the identity whose secret produced it."""

    def identify(self, code: str) -> str:
        """Return the identity owning ``code``.

        Raises:
            ConfigurationError: If either shared secret is not configured
            AuthenticationError: If the code matches neither or both secrets
        """
        config = self.core.config
        secrets = [config.totp_secret_1, config.totp_secret_2]
        if not all(secrets):
            raise ConfigurationError("TOTP secret not configured")

        matches = [identity for identity, secret in zip(config.identities, secrets, strict=True) if verify_code(secret, code)]

        if len(matches) > 1:
            # Both secrets produced the same code for this window
            logger.warning("totp_code_collision")
            raise AuthenticationError("Just a small technical issue :), try again after a new code is generated.")
        if not matches:
            raise AuthenticationError("Invalid TOTP code")

        logger.info("totp_verified", identity=matches[0])
        return matches[0]

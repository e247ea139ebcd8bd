from pydantic_settings import BaseSettings


class IdentityConfig(BaseSettings):
    """Display names of the two chat participants, shared with the secret generator."""

    identity_1: str = "User1"
    identity_2: str = "User2"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DUOCHAT_",
        "extra": "ignore",
    }

    @property
    def identities(self) -> list[str]:
        return [self.identity_1, self.identity_2]


class Config(IdentityConfig):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    session_secret_key: str = ""  # Signing key for session tokens (HS256)
    session_ttl_days: int = 30
    cookie_secure: bool = True  # Disable only for plain-HTTP local development
    cors_origins: list[str] = []
    # Base32 TOTP secrets, one per identity
    totp_secret_1: str = ""
    totp_secret_2: str = ""
    history_limit: int = 50  # Events sent to a newly connected client
    max_message_length: int = 4000
    # Seconds between server pings on the chat socket, and how long to wait for the pong
    ws_ping_interval: float = 20.0
    ws_ping_timeout: float = 20.0

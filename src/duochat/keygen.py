"""Print a fresh pair of TOTP secrets for the two chat identities.

Each secret is shown with the ``otpauth://`` URI an authenticator app can
import, and the environment variable it belongs in. Account labels come from
``DUOCHAT_IDENTITY_1`` and ``DUOCHAT_IDENTITY_2``.
"""

from urllib.parse import quote

from duochat.config import IdentityConfig
from duochat.core.modules.otp.codec import generate_secret
from duochat.core.modules.otp.verifier import DIGITS, TIME_STEP_MS

ISSUER = "duochat"


def provisioning_uri(secret: str, account: str, issuer: str = ISSUER) -> str:
    """Build a Key Uri Format string for authenticator apps."""
    label = quote(f"{issuer}:{account}")
    return (
        f"otpauth://totp/{label}?secret={secret}&issuer={quote(issuer)}"
        f"&algorithm=SHA1&digits={DIGITS}&period={TIME_STEP_MS // 1000}"
    )


def generate_secrets(config: IdentityConfig) -> list[tuple[str, str, str]]:
    """Generate one secret per identity as ``(env_var, secret, uri)`` triples."""
    result = []
    for number, identity in enumerate(config.identities, start=1):
        secret = generate_secret()
        result.append((f"DUOCHAT_TOTP_SECRET_{number}", secret, provisioning_uri(secret, identity)))
    return result


def main() -> None:
    for env_var, secret, uri in generate_secrets(IdentityConfig()):
        print(f"{env_var}={secret}")
        print(f"  {uri}")


if __name__ == "__main__":
    main()

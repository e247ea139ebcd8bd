"""HOTP/TOTP code generation and verification.

Codes are 6 digits, HMAC-SHA1, 30-second time steps: the configuration every
standard authenticator app uses. Verification accepts the previous, current
and next time step to tolerate about 30 seconds of clock drift.
"""

import hashlib
import hmac
import re

import structlog

from duochat.core.modules.otp.codec import decode_secret, encode_counter
from duochat.errors import InvalidSecretEncodingError
from duochat.utils import now_ms

logger = structlog.get_logger(__name__)

DIGITS = 6
TIME_STEP_MS = 30_000
WINDOW = (-1, 0, 1)

_CODE_RE = re.compile(r"[0-9]{6}")
_WHITESPACE_RE = re.compile(r"\s")


def hotp(secret: bytes, counter: int) -> str:
    """Compute the RFC 4226 one-time code for a counter."""
    digest = hmac.new(secret, encode_counter(counter), hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    code = int.from_bytes(digest[offset : offset + 4], "big") & 0x7FFFFFFF
    return str(code % 10**DIGITS).zfill(DIGITS)


def time_step(timestamp_ms: int) -> int:
    return timestamp_ms // TIME_STEP_MS


def totp(secret: bytes, timestamp_ms: int | None = None) -> str:
    """Compute the code for the time step containing ``timestamp_ms``."""
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    return hotp(secret, time_step(timestamp_ms))


def sanitize_code(raw: str) -> str | None:
    """Strip whitespace; return the code if it is exactly six ASCII digits."""
    code = _WHITESPACE_RE.sub("", raw)
    if _CODE_RE.fullmatch(code) is None:
        return None
    return code


def constant_time_equal(a: str, b: str) -> bool:
    """Compare two strings without leaking where they first differ.

    Both sides are hashed to fixed-length digests, then every byte pair is
    XOR-accumulated so the loop always runs to the end.
    """
    digest_a = hashlib.sha256(a.encode("utf-8")).digest()
    digest_b = hashlib.sha256(b.encode("utf-8")).digest()
    result = 0
    for x, y in zip(digest_a, digest_b, strict=True):
        result |= x ^ y
    return result == 0


def verify_code(secret_text: str, raw_code: str, timestamp_ms: int | None = None) -> bool:
    """Verify a submitted code against a Base32 secret.

    Malformed codes are rejected before any HMAC work. An undecodable secret is
    a server misconfiguration: it is logged, and the caller sees the same
    ``False`` as for a wrong code.
    """
    code = sanitize_code(raw_code)
    if code is None:
        return False

    try:
        secret = decode_secret(secret_text)
    except InvalidSecretEncodingError as e:
        logger.error("totp_secret_invalid", error=str(e))
        return False

    if timestamp_ms is None:
        timestamp_ms = now_ms()
    current = time_step(timestamp_ms)

    for delta in WINDOW:
        if constant_time_equal(code, hotp(secret, current + delta)):
            return True
    return False

"""Base32 secret codec and HOTP counter encoding (RFC 4648, RFC 4226)."""

import re
import secrets

from duochat.errors import InvalidSecretEncodingError

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
SECRET_LENGTH = 20  # 160 bits, the RFC 4226 recommended key size

_STRIP_RE = re.compile(r"[=\s]")


def decode_secret(text: str) -> bytes:
    """Decode a Base32 secret, ignoring padding, whitespace and case.

    Trailing bits that do not fill a whole byte are dropped, so the output is
    always ``len(clean) * 5 // 8`` bytes long.

    Raises:
        InvalidSecretEncodingError: If a character is outside the Base32 alphabet
    """
    clean = _STRIP_RE.sub("", text).upper()
    output = bytearray()
    buffer = 0
    bits = 0
    for char in clean:
        index = BASE32_ALPHABET.find(char)
        if index == -1:
            raise InvalidSecretEncodingError(f"Invalid Base32 character: {char!r}")
        buffer = ((buffer << 5) | index) & 0xFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
    return bytes(output)


def encode_secret(data: bytes) -> str:
    """Encode bytes as unpadded Base32."""
    output: list[str] = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = ((buffer << 8) | byte) & 0xFFF
        bits += 8
        while bits >= 5:
            bits -= 5
            output.append(BASE32_ALPHABET[(buffer >> bits) & 0x1F])
    if bits:
        output.append(BASE32_ALPHABET[(buffer << (5 - bits)) & 0x1F])
    return "".join(output)


def encode_counter(counter: int) -> bytes:
    """Encode a non-negative counter as an 8-byte big-endian integer."""
    if counter < 0:
        raise ValueError("Counter must be non-negative")
    high = counter // 0x100000000
    low = counter % 0x100000000
    return high.to_bytes(4, "big") + low.to_bytes(4, "big")


def generate_secret(length: int = SECRET_LENGTH) -> str:
    """Generate a random shared secret as unpadded Base32."""
    return encode_secret(secrets.token_bytes(length))

"""Session token models."""

from typing import NewType

AuthToken = NewType("AuthToken", str)

TOKEN_ALGORITHM = "HS256"

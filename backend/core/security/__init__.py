"""
Security utilities for authentication.
"""

from .tokens import IdentityTokenCodec, bearer_token

__all__ = [
    "IdentityTokenCodec",
    "bearer_token",
]

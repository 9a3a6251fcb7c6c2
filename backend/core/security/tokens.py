"""
JWT identity token codec.
"""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from ..errors import InvalidToken, Unauthenticated
from ..domain.identity import IdentityClaim


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class IdentityTokenCodec:
    """Issues and verifies signed identity assertions carrying an email claim."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_days: int = 365,
    ):
        """
        Initialize the codec.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            expire_days: Token validity window in days
        """
        if not secret_key:
            raise ValueError("Token secret key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_days = expire_days

    @property
    def expire_days(self) -> int:
        return self._expire_days

    def issue(self, claim: IdentityClaim) -> str:
        """
        Create a signed token for the claim.

        Tokens are stateless: every call returns a fresh token and prior
        tokens stay valid until their own expiry.
        """
        now = datetime.now(UTC)
        payload = {
            "email": claim.email,
            "iat": now,
            "exp": now + timedelta(days=self._expire_days),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> IdentityClaim:
        """
        Verify a token and return its claim.

        Raises:
            Unauthenticated: no token was supplied
            InvalidToken: signature, format, expiry or claim check failed
        """
        if not token:
            raise Unauthenticated()

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True},
            )
        except ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except JWTError:
            raise InvalidToken()

        email = payload.get("email")
        if not isinstance(email, str) or not email.strip():
            raise InvalidToken("Token is missing the email claim")

        return IdentityClaim(email=email)

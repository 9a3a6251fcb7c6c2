"""
Payment intent schemas.
"""

from pydantic import BaseModel, Field


class PaymentIntentRequest(BaseModel):
    """Price in major currency units (e.g. dollars)."""

    price: float = Field(..., gt=0, le=100000)

    @property
    def amount_cents(self) -> int:
        return int(round(self.price * 100))


class PaymentIntentResponse(BaseModel):
    client_secret: str

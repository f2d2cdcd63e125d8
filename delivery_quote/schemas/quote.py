from typing import Optional
from pydantic import BaseModel, Field, field_validator

class QuoteRequest(BaseModel):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    coupon_code: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None

    @field_validator("origin", "destination")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address cannot be blank")
        return v

    @field_validator("customer_email")
    @classmethod
    def _check_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("invalid email address")
        return v

class QuoteResponse(BaseModel):
    origin: str
    destination: str
    distance_km: float
    tier: str
    net: int
    discount: int
    net_after_discount: int
    tax: int
    total: int
    discount_label: str = ""
    coupon_code: Optional[str] = None
    advisory: str
    email_queued: bool = False

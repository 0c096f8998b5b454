# server/schemas.py

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from core.totp import DIGITS as OTP_DIGITS


class CamelModel(BaseModel):
    """
    Wire models use camelCase keys (userId, createdAt, ...).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# -------------------------------
# Users
# -------------------------------

class UserOut(CamelModel):
    id: int
    username: str


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterResponse(CamelModel):
    id: int
    username: str
    otp_secret: str


class LoginRequest(BaseModel):
    username: str
    password: str
    otp: str | None = None

    @field_validator("otp", mode="before")
    @classmethod
    def otp_as_text(cls, value):
        # Clients may send the code as a JSON number, which drops leading zeros.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value).zfill(OTP_DIGITS)
        return value


class TokenResponse(BaseModel):
    token: str


# -------------------------------
# Products
# -------------------------------

class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(strict=True)
    description: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, strict=True)
    description: str | None = None


class ProductOut(CamelModel):
    id: int
    name: str
    price: float
    description: str | None = None
    user_id: int
    created_at: datetime
    user: UserOut | None = None


# -------------------------------
# Transactions
# -------------------------------

class TransactionCreate(CamelModel):
    to_user_id: int = Field(gt=0, strict=True)
    product_id: int | None = Field(default=None, strict=True)
    amount: float = Field(strict=True)


class TransactionStatusUpdate(BaseModel):
    status: Literal["pending", "completed", "cancelled"]


class ProductSummary(CamelModel):
    id: int
    name: str
    price: float


class TransactionOut(CamelModel):
    id: int
    from_user_id: int
    to_user_id: int
    product_id: int | None = None
    amount: float
    status: str
    created_at: datetime
    from_user: UserOut | None = None
    to_user: UserOut | None = None
    product: ProductSummary | None = None

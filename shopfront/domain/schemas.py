# shopfront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List
from datetime import datetime

from shopfront.domain.permissions import Permission


class SignupIn(BaseModel):
    """Schema dla rejestracji."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_has_at(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("Invalid email address")
        return value


class SigninIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RequestResetIn(BaseModel):
    email: str = Field(..., min_length=1)


class ResetPasswordIn(BaseModel):
    reset_token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class UpdatePermissionsIn(BaseModel):
    permissions: List[Permission]


class UserRead(BaseModel):
    """Schema dla uzytkownika (response). Bez hasla i tokenu resetu."""

    id: int
    name: str
    email: str
    permissions: List[Permission]

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str


class ItemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    image: str | None = None
    large_image: str | None = None
    price: int = Field(..., ge=0, description="Cena w najmniejszej jednostce waluty")


class ItemUpdate(BaseModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    image: str | None = None
    large_image: str | None = None
    price: int | None = Field(None, ge=0)


class ItemOut(BaseModel):
    id: int
    title: str
    description: str
    image: str | None = None
    large_image: str | None = None
    price: int
    user_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class CartItemOut(BaseModel):
    """Schema dla linii koszyka (response)."""

    id: int
    item_id: int
    quantity: int
    item: ItemOut

    model_config = ConfigDict(from_attributes=True)


class RemovedCartItemOut(BaseModel):
    id: int
    item_id: int


class CartOut(BaseModel):
    user_id: int
    items: List[CartItemOut]
    total: int


class MeOut(UserRead):
    cart: List[CartItemOut] = []


class CheckoutIn(BaseModel):
    token: str = Field(..., min_length=1, description="Token zrodla platnosci z bramki")


class OrderItemOut(BaseModel):
    id: int
    title: str
    description: str
    image: str | None = None
    large_image: str | None = None
    price: int
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    total: int
    charge: str
    created_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)

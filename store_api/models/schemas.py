from decimal import Decimal
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar
from datetime import datetime
from store_api.models.database import UserRole

T = TypeVar("T")


class CamelModel(BaseModel):
    """Wire schemas use camelCase; Python code uses field names"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PagedResult(CamelModel, Generic[T]):
    items: List[T]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int


# Categories

class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: str
    created_at: datetime
    product_count: int = 0


# Products

class ProductCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock: int = Field(ge=0)
    category_id: int


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    category_id: int
    category_name: str = ""
    created_at: datetime
    updated_at: datetime


# Users and auth

class UserCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr = Field(max_length=200)
    password: str = Field(min_length=6)
    phone: str = Field(default="", max_length=20)
    address: str = Field(default="", max_length=500)
    role: UserRole = UserRole.CUSTOMER


class UserUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = Field(default=None, max_length=200)
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    role: Optional[UserRole] = None


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    role: UserRole
    created_at: datetime


class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


# Orders

class OrderItemCreate(CamelModel):
    product_id: int
    quantity: int = Field(ge=1)


class OrderCreate(CamelModel):
    user_id: int
    shipping_address: str = Field(min_length=1, max_length=500)
    order_items: List[OrderItemCreate] = Field(min_length=1)


class OrderUpdate(CamelModel):
    """Patch for an order; status is validated against OrderStatus by the service"""
    shipping_address: Optional[str] = Field(default=None, max_length=500)
    status: Optional[str] = None


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    product_name: str = ""
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class OrderResponse(CamelModel):
    id: int
    user_id: int
    user_name: str = ""
    total_amount: Decimal
    status: str
    shipping_address: str
    order_date: datetime
    shipped_date: Optional[datetime] = None
    delivered_date: Optional[datetime] = None
    order_items: List[OrderItemResponse] = []

"""Directory Entities

Read-only records owned by other parts of the CRM: user profiles (tenant
membership), contacts and catalog products. The invoice engine looks them
up but never writes them.
"""

from typing import Optional
from decimal import Decimal
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, Numeric
from src.domain.base import BaseModel, generate_uuid


class Profile(BaseModel, table=True):
    """User profile linking an authenticated user to an organization"""

    __tablename__ = "profiles"

    user_id: str = Field(primary_key=True)
    org_id: str = Field(index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip() or "Unknown"


class Contact(BaseModel, table=True):
    """Billable contact"""

    __tablename__ = "contacts"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    org_id: str = Field(index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip() or "Unknown"


class Product(BaseModel, table=True):
    """Catalog product supplying default line item values"""

    __tablename__ = "products"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    org_id: str = Field(index=True)
    name: str
    description: Optional[str] = None
    price: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False),
        description="Unit price in minor currency units"
    )
    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(7, 4), nullable=False),
    )

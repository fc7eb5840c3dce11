from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_serializer

from hisaabu.core.schemas import CamelModel, RecordName


class ProductCreate(CamelModel):
    name: RecordName
    description: str | None = None
    sku: str | None = Field(default=None, max_length=128)
    unit_price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, max_digits=5, decimal_places=2)
    category: str | None = Field(default=None, max_length=128)
    is_active: bool = True


class ProductUpdate(CamelModel):
    name: RecordName | None = None
    description: str | None = None
    sku: str | None = Field(default=None, max_length=128)
    unit_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    tax_rate: Decimal | None = Field(default=None, ge=0, le=100, max_digits=5, decimal_places=2)
    category: str | None = Field(default=None, max_length=128)
    is_active: bool | None = None


class ProductOut(CamelModel):
    id: str
    company_id: str
    name: str
    description: str | None = None
    sku: str | None = None
    unit_price: Decimal
    tax_rate: Decimal
    category: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    # money goes over the wire as a JSON number
    @field_serializer("unit_price", "tax_rate")
    def _as_number(self, value: Decimal) -> float:
        return float(value)

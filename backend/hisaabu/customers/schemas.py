from datetime import datetime

from pydantic import EmailStr, Field

from hisaabu.company.schemas import Address
from hisaabu.core.schemas import CamelModel, RecordName


class CustomerCreate(CamelModel):
    name: RecordName
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    website: str | None = Field(default=None, max_length=1024)
    gst_tin_number: str | None = Field(default=None, max_length=64)
    contact_person: str | None = Field(default=None, max_length=255)
    designation: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    address: Address | None = None
    is_active: bool = True


class CustomerUpdate(CamelModel):
    name: RecordName | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    website: str | None = Field(default=None, max_length=1024)
    gst_tin_number: str | None = Field(default=None, max_length=64)
    contact_person: str | None = Field(default=None, max_length=255)
    designation: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    address: Address | None = None
    is_active: bool | None = None


class CustomerOut(CamelModel):
    id: str
    company_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    gst_tin_number: str | None = None
    contact_person: str | None = None
    designation: str | None = None
    notes: str | None = None
    address: Address | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

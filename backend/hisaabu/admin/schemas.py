from datetime import datetime
from typing import Literal

from pydantic import Field

from hisaabu.core.schemas import CamelModel


class CompanyAdminOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    status: str
    plan: str
    created_at: datetime
    approved_at: datetime | None = None
    approved_by_id: str | None = None


class CompanyAdminDetail(CompanyAdminOut):
    website: str | None = None
    gst_tin_number: str | None = None


class CompanyPage(CamelModel):
    data: list[CompanyAdminOut]
    total: int
    page: int
    limit: int
    total_pages: int


class CompanyStatusUpdate(CamelModel):
    status: Literal["pending", "approved", "rejected", "suspended"]


class CompanyPlanUpdate(CamelModel):
    # checked against COMPANY_PLANS by the service, which reports a 400
    plan: str = Field(min_length=1)

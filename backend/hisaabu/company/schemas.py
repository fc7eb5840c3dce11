from datetime import datetime

from pydantic import EmailStr, Field

from hisaabu.core.schemas import CamelModel, PersonOrCompanyName


class Address(CamelModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None


class SocialLinks(CamelModel):
    facebook: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    twitter: str | None = None


class BankAccount(CamelModel):
    bank_name: str = Field(min_length=1)
    account_holder: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    ifsc_code: str = Field(min_length=1)
    branch_name: str | None = None


class CompanyProfileOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    website: str | None = None
    logo_url: str | None = None
    gst_tin_number: str | None = None
    default_currency_code: str
    header_note: str | None = None
    footer_note: str | None = None
    default_terms: str | None = None
    default_invoice_terms: str | None = None
    default_quotation_terms: str | None = None
    address: Address | None = None
    social_links: SocialLinks | None = None
    bank_accounts: list[BankAccount] | None = None
    status: str
    plan: str
    created_at: datetime


class CompanyProfileUpdate(CamelModel):
    name: PersonOrCompanyName | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    website: str | None = Field(default=None, max_length=1024)
    logo_url: str | None = Field(default=None, max_length=1024)
    gst_tin_number: str | None = Field(default=None, max_length=64)
    default_currency_code: str | None = Field(default=None, min_length=3, max_length=3)
    header_note: str | None = None
    footer_note: str | None = None
    default_terms: str | None = None
    default_invoice_terms: str | None = None
    default_quotation_terms: str | None = None
    address: Address | None = None
    social_links: SocialLinks | None = None
    bank_accounts: list[BankAccount] | None = None

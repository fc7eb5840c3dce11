from pydantic import EmailStr, Field, field_validator

from hisaabu.auth.security import assess_password_strength
from hisaabu.core.schemas import CamelModel, PersonOrCompanyName


class CompanyRegistration(CamelModel):
    name: PersonOrCompanyName
    email: EmailStr
    phone: str | None = Field(default=None, max_length=64)
    gst_tin_number: str | None = Field(default=None, max_length=64)
    default_currency_code: str = Field(min_length=3, max_length=3, description="e.g. USD")

    @field_validator("default_currency_code")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()


class UserRegistration(CamelModel):
    name: PersonOrCompanyName
    email: EmailStr
    # bcrypt hard limit = 72 bytes
    password: str = Field(max_length=72)

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes long")
        strength = assess_password_strength(value)
        if not strength.valid:
            raise ValueError(strength.reason)
        return value


class RegisterCompanyRequest(CamelModel):
    company: CompanyRegistration
    user: UserRegistration


class RegisterCompanyResponse(CamelModel):
    company_id: str
    user_id: str


class LoginRequest(CamelModel):
    email: EmailStr
    # prevent bcrypt crash on long input
    password: str = Field(min_length=1, max_length=72)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str


class CompanyUserOut(CamelModel):
    id: str
    name: str
    email: str
    role: str
    company_id: str


class CompanyOut(CamelModel):
    id: str
    name: str
    status: str
    plan: str


class UserWithCompany(CamelModel):
    user: CompanyUserOut
    company: CompanyOut


class UserLoginResponse(TokenResponse):
    user: CompanyUserOut
    company: CompanyOut

from sqlalchemy import select
from sqlalchemy.orm import Session

from hisaabu.company.models import Company
from hisaabu.company.schemas import CompanyProfileUpdate
from hisaabu.core.errors import Conflict, NotFound

# Fields stored as JSON columns; kept in their camelCase wire form.
_JSON_FIELDS = ("address", "social_links", "bank_accounts")


def get_profile(db: Session, company_id: str) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFound("Company not found")
    return company


def update_profile(db: Session, company_id: str, data: CompanyProfileUpdate) -> Company:
    company = get_profile(db, company_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("email"):
        new_email = str(changes["email"]).lower()
        taken = db.execute(
            select(Company.id).where(Company.email == new_email, Company.id != company_id)
        ).first()
        if taken:
            raise Conflict("A company with this email already exists")
        changes["email"] = new_email

    if "logo_url" in changes:
        changes["logo_url"] = changes["logo_url"] or None

    for field in _JSON_FIELDS:
        if field in changes and changes[field] is not None:
            value = getattr(data, field)
            if isinstance(value, list):
                changes[field] = [item.model_dump(by_alias=True, exclude_none=True) for item in value]
            else:
                changes[field] = value.model_dump(by_alias=True, exclude_none=True)

    for field, value in changes.items():
        # required columns are never nulled out by a partial update
        if value is None and field in {"name", "email", "default_currency_code"}:
            continue
        setattr(company, field, value)

    db.add(company)
    db.commit()
    db.refresh(company)
    return company

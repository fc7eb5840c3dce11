import logging
import math
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hisaabu.company.models import COMPANY_PLANS, COMPANY_STATUSES, Company
from hisaabu.core.errors import NotFound, ValidationFailed

logger = logging.getLogger(__name__)


def _get_company_or_404(db: Session, company_id: str) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFound("Company not found")
    return company


def list_companies(db: Session, page: int = 1, limit: int = 10) -> dict:
    page = max(page, 1)
    limit = max(limit, 1)

    rows = db.execute(
        select(Company)
        .order_by(Company.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).scalars().all()
    total = db.execute(select(func.count(Company.id))).scalar_one()

    return {
        "data": rows,
        "total": int(total),
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
    }


def get_company_detail(db: Session, company_id: str) -> Company:
    return _get_company_or_404(db, company_id)


def update_company_status(db: Session, company_id: str, status: str, admin_id: str) -> Company:
    """
    Move a company to ``status``.

    Approving stamps ``approved_at``/``approved_by_id``; every other status
    clears them. This is the only place a company's status changes.
    """
    company = _get_company_or_404(db, company_id)
    if status not in COMPANY_STATUSES:
        raise ValidationFailed(f"Status must be one of: {', '.join(COMPANY_STATUSES)}")

    previous = company.status
    company.status = status
    if status == "approved":
        company.approved_at = datetime.utcnow()
        company.approved_by_id = admin_id
    else:
        company.approved_at = None
        company.approved_by_id = None

    db.add(company)
    db.commit()
    db.refresh(company)

    logger.info(
        "Company %s status %s -> %s by admin %s", company.id, previous, status, admin_id
    )
    return company


def update_company_plan(db: Session, company_id: str, plan: str) -> Company:
    company = _get_company_or_404(db, company_id)
    if plan not in COMPANY_PLANS:
        raise ValidationFailed(f"Plan must be one of: {', '.join(COMPANY_PLANS)}")

    company.plan = plan
    db.add(company)
    db.commit()
    db.refresh(company)

    logger.info("Company %s plan set to %s", company.id, plan)
    return company

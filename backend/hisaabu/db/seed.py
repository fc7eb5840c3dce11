"""
Development seed: one platform admin, one approved ``pro`` company and one
pending ``starter`` company, each company with an admin user and a
numbering sequence.

Run with ``python -m hisaabu.db.seed``. Existing rows are wiped first.
"""

import logging
import secrets
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from hisaabu.auth.models import User
from hisaabu.auth.security import hash_password
from hisaabu.company.models import Company, Sequence
from hisaabu.core.config import get_settings
from hisaabu.customers.models import Customer
from hisaabu.db.init_db import init_db
from hisaabu.db.session import build_engine, build_session_factory
from hisaabu.platform_admin.models import PlatformAdmin
from hisaabu.platform_admin.service import create_platform_admin
from hisaabu.products.models import Product

logger = logging.getLogger(__name__)

SUPER_ADMIN = {"name": "Admin User", "email": "admin@hisaabu.dev", "password": "admin123"}
PRO_USER = {"name": "Demo User (Pro)", "email": "user@democompany.com", "password": "Demo123!"}
PENDING_USER = {
    "name": "Pending User (Starter)",
    "email": "user@pendingcompany.com",
    "password": "Pending123!",
}


def _id(prefix: str) -> str:
    return f"{prefix}_{secrets.token_hex(12)}"


def _clear(db: Session) -> None:
    for model in (Product, Customer, User, Sequence, Company, PlatformAdmin):
        db.execute(delete(model))


def _company_with_admin(db: Session, company: Company, user: dict, *, verified: bool) -> None:
    db.add(company)
    db.flush()
    db.add(
        User(
            id=_id("u"),
            company_id=company.id,
            name=user["name"],
            email=user["email"],
            password_hash=hash_password(user["password"]),
            role="admin",
            is_active=True,
            email_verified=verified,
        )
    )
    db.add(Sequence(id=_id("seq"), company_id=company.id))


def seed(db: Session) -> None:
    _clear(db)

    db.commit()
    admin = create_platform_admin(
        db,
        name=SUPER_ADMIN["name"],
        email=SUPER_ADMIN["email"],
        password=SUPER_ADMIN["password"],
    )

    _company_with_admin(
        db,
        Company(
            id=_id("co"),
            name="Demo Pro Company",
            email="demo@company.com",
            phone="+1234567890",
            website="https://democompany.com",
            gst_tin_number="GST123456789",
            default_currency_code="USD",
            status="approved",
            plan="pro",
            approved_at=datetime.utcnow(),
            approved_by_id=admin.id,
            header_note="Thank you for your business",
            footer_note="Payment Terms: Net 30",
            default_terms="Payment due within 30 days",
        ),
        PRO_USER,
        verified=True,
    )
    _company_with_admin(
        db,
        Company(
            id=_id("co"),
            name="Pending Starter Company",
            email="pending@company.com",
            phone="+9876543210",
            website="https://pendingcompany.com",
            gst_tin_number="GST987654321",
            default_currency_code="USD",
            status="pending",
            plan="starter",
            header_note="Waiting for approval",
            footer_note="This is a pending company",
        ),
        PENDING_USER,
        verified=False,
    )
    db.commit()


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    engine = build_engine(settings)
    init_db(engine)
    session_factory = build_session_factory(engine)
    with session_factory() as db:
        seed(db)

    logger.info("Seeded platform admin %s", SUPER_ADMIN["email"])
    logger.info("Seeded approved pro company user %s", PRO_USER["email"])
    logger.info("Seeded pending starter company user %s", PENDING_USER["email"])


if __name__ == "__main__":
    main()

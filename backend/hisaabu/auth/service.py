import logging
import secrets
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hisaabu.auth.models import User
from hisaabu.auth.schemas import (
    CompanyOut,
    CompanyRegistration,
    CompanyUserOut,
    UserRegistration,
)
from hisaabu.auth.security import hash_password, verify_password
from hisaabu.company.models import Company, Sequence
from hisaabu.core.errors import AppError, Conflict, Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class RegistrationResult:
    company_id: str
    user_id: str


def _new_id(prefix: str) -> str:
    return f"{prefix}_{secrets.token_hex(12)}"


def _user_out(user: User) -> CompanyUserOut:
    return CompanyUserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        company_id=user.company_id,
    )


def _company_out(company: Company) -> CompanyOut:
    return CompanyOut(
        id=company.id,
        name=company.name,
        status=company.status,
        plan=company.plan,
    )


def check_company_email_exists(db: Session, email: str) -> bool:
    return db.execute(
        select(Company.id).where(Company.email == email.lower())
    ).first() is not None


def check_user_email_exists(db: Session, company_id: str, email: str) -> bool:
    return db.execute(
        select(User.id).where(
            User.company_id == company_id,
            User.email == email.lower(),
        )
    ).first() is not None


def register_company(
    db: Session,
    company: CompanyRegistration,
    user: UserRegistration,
) -> RegistrationResult:
    """
    Create a pending company, its first admin user and its numbering sequence.

    The three rows are committed together or not at all.
    """
    company_email = str(company.email).lower()
    if check_company_email_exists(db, company_email):
        raise Conflict("A company with this email already exists")

    pw_hash = hash_password(user.password)

    company_row = Company(
        id=_new_id("co"),
        name=company.name,
        email=company_email,
        phone=company.phone,
        gst_tin_number=company.gst_tin_number,
        default_currency_code=company.default_currency_code,
        status="pending",
        plan="starter",
    )
    user_row = User(
        id=_new_id("u"),
        company_id=company_row.id,
        name=user.name,
        email=str(user.email).lower(),
        password_hash=pw_hash,
        role="admin",
        is_active=True,
        email_verified=False,
    )
    sequence_row = Sequence(id=_new_id("seq"), company_id=company_row.id)

    try:
        db.add(company_row)
        db.flush()
        db.add(user_row)
        db.add(sequence_row)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # a concurrent registration took the email between the check and the insert
        if check_company_email_exists(db, company_email):
            raise Conflict("A company with this email already exists") from exc
        logger.exception("Company registration failed for %s", company_email)
        raise AppError("Failed to register company", 500) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Company registration failed for %s", company_email)
        raise AppError("Failed to register company", 500) from exc

    logger.info("Registered company %s (pending) with admin user %s", company_row.id, user_row.id)
    return RegistrationResult(company_id=company_row.id, user_id=user_row.id)


def authenticate_user(
    db: Session, email: str, password: str
) -> tuple[CompanyUserOut, CompanyOut]:
    # Email is only unique per company; the oldest matching account wins.
    user = db.execute(
        select(User)
        .where(User.email == email.lower())
        .order_by(User.created_at.asc(), User.id.asc())
    ).scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed company user login for %s", email.lower())
        raise Unauthenticated(INVALID_CREDENTIALS)

    if not user.is_active:
        raise Forbidden("This user account has been deactivated")

    company = user.company
    if company.status != "approved":
        raise Forbidden(
            f"Your company is currently {company.status}. Please wait for admin approval."
        )

    return _user_out(user), _company_out(company)


def get_user_by_id(db: Session, user_id: str) -> CompanyUserOut | None:
    user = db.get(User, user_id)
    if not user:
        return None
    return _user_out(user)


def get_user_with_company(
    db: Session, user_id: str
) -> tuple[CompanyUserOut, CompanyOut] | None:
    user = db.get(User, user_id)
    if not user:
        return None
    return _user_out(user), _company_out(user.company)

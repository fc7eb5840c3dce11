import logging
import secrets

from sqlalchemy import select
from sqlalchemy.orm import Session

from hisaabu.auth.security import hash_password, verify_password
from hisaabu.core.errors import Conflict, Forbidden, Unauthenticated, ValidationFailed
from hisaabu.platform_admin.models import PLATFORM_ADMIN_ROLES, PlatformAdmin
from hisaabu.platform_admin.schemas import PlatformAdminOut

logger = logging.getLogger(__name__)


def _to_out(admin: PlatformAdmin) -> PlatformAdminOut:
    return PlatformAdminOut(id=admin.id, name=admin.name, email=admin.email, role=admin.role)


def _find_by_email(db: Session, email: str) -> PlatformAdmin | None:
    return db.execute(
        select(PlatformAdmin).where(PlatformAdmin.email == email.lower())
    ).scalar_one_or_none()


def authenticate_platform_admin(db: Session, email: str, password: str) -> PlatformAdminOut:
    admin = _find_by_email(db, email)
    if not admin or not verify_password(password, admin.password_hash):
        logger.warning("Failed platform admin login for %s", email.lower())
        raise Unauthenticated("Invalid email or password")

    if not admin.is_active:
        raise Forbidden("This admin account has been deactivated")

    return _to_out(admin)


def get_platform_admin_by_id(db: Session, admin_id: str) -> PlatformAdminOut | None:
    admin = db.get(PlatformAdmin, admin_id)
    return _to_out(admin) if admin else None


def get_platform_admin_by_email(db: Session, email: str) -> PlatformAdminOut | None:
    admin = _find_by_email(db, email)
    return _to_out(admin) if admin else None


def create_platform_admin(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = "super_admin",
) -> PlatformAdminOut:
    if role not in PLATFORM_ADMIN_ROLES:
        raise ValidationFailed(f"Role must be one of: {', '.join(PLATFORM_ADMIN_ROLES)}")
    if _find_by_email(db, email):
        raise Conflict("Admin with this email already exists")

    admin = PlatformAdmin(
        id=f"pa_{secrets.token_hex(12)}",
        name=name,
        email=email.lower(),
        password_hash=hash_password(password),
        role=role,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Created platform admin %s (%s)", admin.id, admin.role)
    return _to_out(admin)

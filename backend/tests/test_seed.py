import pytest
from sqlalchemy import func, select

from hisaabu.auth import service
from hisaabu.company.models import Company, Sequence
from hisaabu.core.errors import Forbidden
from hisaabu.db.seed import PENDING_USER, PRO_USER, SUPER_ADMIN, seed
from hisaabu.platform_admin.service import authenticate_platform_admin


def test_seed_creates_demo_tenants_and_is_repeatable(db):
    seed(db)
    seed(db)

    companies = {c.email: c for c in db.execute(select(Company)).scalars()}
    assert set(companies) == {"demo@company.com", "pending@company.com"}
    assert companies["demo@company.com"].status == "approved"
    assert companies["demo@company.com"].plan == "pro"
    assert companies["demo@company.com"].approved_by_id is not None
    assert companies["pending@company.com"].status == "pending"
    assert db.execute(select(func.count()).select_from(Sequence)).scalar_one() == 2

    assert authenticate_platform_admin(db, SUPER_ADMIN["email"], SUPER_ADMIN["password"]).role == "super_admin"
    user, company = service.authenticate_user(db, PRO_USER["email"], PRO_USER["password"])
    assert company.plan == "pro"
    with pytest.raises(Forbidden):
        service.authenticate_user(db, PENDING_USER["email"], PENDING_USER["password"])

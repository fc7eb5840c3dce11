import secrets
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

import hisaabu.db.models  # noqa: F401
from hisaabu.auth.models import User
from hisaabu.auth.security import hash_password
from hisaabu.auth.tokens import AccessClaims, TokenService
from hisaabu.company.models import Company, Sequence
from hisaabu.core.config import Settings
from hisaabu.db.base import Base
from hisaabu.db.session import build_session_factory
from hisaabu.main import create_app
from hisaabu.platform_admin.models import PlatformAdmin

PASSWORD = "Passw0rd!"
NOW = 1_700_000_000

_hash_cache: dict[str, str] = {}


def _hashed(password: str) -> str:
    if password not in _hash_cache:
        _hash_cache[password] = hash_password(password)
    return _hash_cache[password]


class FakeClock:
    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ENV="dev",
        DATABASE_URL="sqlite://",
        AUTO_CREATE_TABLES=False,
        JWT_SECRET="test-access-secret",
        JWT_REFRESH_SECRET="test-refresh-secret",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tokens(settings, clock):
    return TokenService.from_settings(settings, clock=clock)


@pytest.fixture
def app(settings, engine, tokens):
    return create_app(settings=settings, engine=engine, token_service=tokens)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_company(db):
    def _make(*, status="approved", plan="starter", email=None, name="Acme Traders"):
        company = Company(
            id=f"co_{secrets.token_hex(6)}",
            name=name,
            email=email or f"billing-{secrets.token_hex(4)}@acme.com",
            default_currency_code="USD",
            status=status,
            plan=plan,
        )
        db.add(company)
        db.add(Sequence(id=f"seq_{secrets.token_hex(6)}", company_id=company.id))
        db.commit()
        return company

    return _make


@pytest.fixture
def make_user(db):
    def _make(company, *, email=None, password=PASSWORD, role="admin", is_active=True, created_at=None):
        user = User(
            id=f"u_{secrets.token_hex(6)}",
            company_id=company.id,
            name="Asha Rao",
            email=email or f"user-{secrets.token_hex(4)}@acme.com",
            password_hash=_hashed(password),
            role=role,
            is_active=is_active,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_admin(db):
    def _make(*, email="root@hisaabu.dev", password=PASSWORD, is_active=True):
        admin = PlatformAdmin(
            id=f"pa_{secrets.token_hex(6)}",
            name="Platform Root",
            email=email,
            password_hash=_hashed(password),
            role="super_admin",
            is_active=is_active,
        )
        db.add(admin)
        db.commit()
        return admin

    return _make


@pytest.fixture
def user_headers(tokens):
    def _headers(user, company=None, *, role=None, company_status=None):
        company = company or user.company
        token = tokens.issue_access(
            AccessClaims(
                user_id=user.id,
                email=user.email,
                user_type="company_user",
                role=role or user.role,
                company_id=company.id,
                company_status=company_status or company.status,
            )
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers(tokens):
    def _headers(admin):
        token = tokens.issue_access(
            AccessClaims(
                user_id=admin.id,
                email=admin.email,
                user_type="platform_admin",
                role=admin.role,
            )
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers

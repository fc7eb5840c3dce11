import pytest
from jose import jwt

from hisaabu.auth.tokens import AccessClaims, RefreshClaims, TokenService, extract_bearer
from hisaabu.core.config import Settings

from conftest import NOW


def _claims(**overrides):
    values = {
        "user_id": "u_1",
        "email": "asha@acme.com",
        "user_type": "company_user",
        "role": "admin",
        "company_id": "co_1",
        "company_status": "approved",
    }
    values.update(overrides)
    return AccessClaims(**values)


def test_access_token_round_trip_keeps_claims(tokens):
    token = tokens.issue_access(_claims())

    claims = tokens.verify_access(token)

    assert claims is not None
    assert claims.user_id == "u_1"
    assert claims.email == "asha@acme.com"
    assert claims.user_type == "company_user"
    assert claims.role == "admin"
    assert claims.company_id == "co_1"
    assert claims.company_status == "approved"
    assert claims.iat == NOW
    assert claims.exp == NOW + tokens.access_ttl_seconds


def test_wire_claims_are_camel_case(tokens, settings):
    token = tokens.issue_access(_claims())

    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert payload["userId"] == "u_1"
    assert payload["userType"] == "company_user"
    assert payload["companyStatus"] == "approved"


def test_platform_admin_token_has_no_company_claims(tokens):
    token = tokens.issue_access(
        _claims(user_type="platform_admin", role="super_admin", company_id=None, company_status=None)
    )

    claims = tokens.verify_access(token)

    assert claims.user_type == "platform_admin"
    assert claims.company_id is None
    assert claims.company_status is None


def test_access_and_refresh_secrets_are_not_interchangeable(tokens):
    access = tokens.issue_access(_claims())
    refresh = tokens.issue_refresh(RefreshClaims(user_id="u_1", user_type="company_user"))

    assert tokens.verify_refresh(access) is None
    assert tokens.verify_access(refresh) is None
    assert tokens.verify_refresh(refresh).user_id == "u_1"


def test_access_token_expires_exactly_at_exp(tokens, clock):
    token = tokens.issue_access(_claims())
    exp = NOW + tokens.access_ttl_seconds

    clock.now = exp - 1
    assert tokens.verify_access(token) is not None

    clock.now = exp
    assert tokens.verify_access(token) is None


def test_refresh_token_lives_longer_than_access_token(tokens, clock):
    access = tokens.issue_access(_claims())
    refresh = tokens.issue_refresh(RefreshClaims(user_id="u_1", user_type="company_user"))

    clock.now = NOW + tokens.access_ttl_seconds + 60

    assert tokens.verify_access(access) is None
    assert tokens.verify_refresh(refresh) is not None


def test_token_signed_with_other_secret_or_algorithm_is_rejected(tokens, settings):
    foreign = jwt.encode(
        {"userId": "u_1", "email": "a@acme.com", "userType": "company_user", "role": "admin", "exp": NOW + 60},
        "someone-elses-secret",
        algorithm="HS256",
    )
    other_alg = jwt.encode(
        {"userId": "u_1", "email": "a@acme.com", "userType": "company_user", "role": "admin", "exp": NOW + 60},
        settings.JWT_SECRET,
        algorithm="HS512",
    )

    assert tokens.verify_access(foreign) is None
    assert tokens.verify_access(other_alg) is None
    assert tokens.verify_access("not.a.jwt") is None


def test_token_without_exp_or_required_claims_is_rejected(tokens, settings):
    no_exp = jwt.encode(
        {"userId": "u_1", "email": "a@acme.com", "userType": "company_user", "role": "admin"},
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    missing_role = jwt.encode(
        {"userId": "u_1", "email": "a@acme.com", "userType": "company_user", "exp": NOW + 60},
        settings.JWT_SECRET,
        algorithm="HS256",
    )

    assert tokens.verify_access(no_exp) is None
    assert tokens.verify_access(missing_role) is None


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Bearer ", None),
        ("bearer abc", None),
        ("Token abc", None),
        ("Bearer abc def", None),
    ],
)
def test_extract_bearer(header, expected):
    assert extract_bearer(header) == expected


def test_secrets_are_required_outside_dev():
    with pytest.raises(RuntimeError):
        TokenService.from_settings(Settings(_env_file=None, ENV="production", JWT_SECRET=None, JWT_REFRESH_SECRET=None))

    with pytest.raises(RuntimeError):
        TokenService.from_settings(
            Settings(_env_file=None, ENV="production", JWT_SECRET="same", JWT_REFRESH_SECRET="same")
        )


def test_dev_falls_back_to_development_secrets():
    service = TokenService.from_settings(Settings(_env_file=None, ENV="dev", JWT_SECRET=None, JWT_REFRESH_SECRET=None))

    assert service.verify_access(service.issue_access(_claims())) is not None

import pytest

from hisaabu.auth.security import (
    BCRYPT_ROUNDS,
    assess_password_strength,
    hash_password,
    verify_password,
)


def test_hash_uses_configured_cost_and_verifies():
    hashed = hash_password("Passw0rd!")

    assert hashed != "Passw0rd!"
    assert f"${BCRYPT_ROUNDS:02d}$" in hashed
    assert verify_password("Passw0rd!", hashed)
    assert not verify_password("passw0rd!", hashed)


def test_verify_rejects_garbage_hash_and_overlong_input():
    assert verify_password("Passw0rd!", "not-a-bcrypt-hash") is False
    assert verify_password("x" * 73, hash_password("Passw0rd!")) is False


def test_hash_refuses_more_than_72_bytes():
    with pytest.raises(ValueError):
        hash_password("é" * 37)


@pytest.mark.parametrize(
    ("password", "reason"),
    [
        ("", "Password must be at least 8 characters long"),
        ("Ab1", "Password must be at least 8 characters long"),
        ("lowercase1", "Password must contain at least one uppercase letter"),
        ("UPPERCASE1", "Password must contain at least one lowercase letter"),
        ("NoDigitsHere", "Password must contain at least one number"),
    ],
)
def test_password_strength_reports_first_failing_rule(password, reason):
    result = assess_password_strength(password)

    assert result.valid is False
    assert result.reason == reason


def test_password_strength_accepts_strong_password():
    result = assess_password_strength("Passw0rd!")

    assert result.valid is True
    assert result.reason is None

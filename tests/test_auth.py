"""
Tests for credential checks, password hashing and MFA secret generation.
"""
import pyotp
import pytest

from app.core.auth import (
    authenticate,
    generate_mfa_secret,
    get_password_hash,
    verify_password,
)
from app.core.config import Settings


def _settings(**overrides):
    values = dict(ADMIN_USERNAME=None, ADMIN_PASSWORD=None, ADMIN_PASSWORD_HASH=None)
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.parametrize("configured", [
    {},
    {"ADMIN_USERNAME": "admin"},
    {"ADMIN_PASSWORD": "s3cret"},
    {"ADMIN_USERNAME": "", "ADMIN_PASSWORD": ""},
])
def test_unconfigured_credentials_never_authenticate(configured):
    settings = _settings(**configured)

    assert authenticate("admin", "s3cret", settings) is False
    assert authenticate("", "", settings) is False


def test_plain_password_exact_match():
    settings = _settings(ADMIN_USERNAME="admin", ADMIN_PASSWORD="s3cret")

    assert authenticate("admin", "s3cret", settings) is True
    assert authenticate("admin", "S3cret", settings) is False
    assert authenticate("Admin", "s3cret", settings) is False
    assert authenticate("admin", "s3cret ", settings) is False
    assert authenticate("admin", "", settings) is False
    assert authenticate(None, None, settings) is False


def test_non_ascii_credentials():
    settings = _settings(ADMIN_USERNAME="админ", ADMIN_PASSWORD="лозинка")

    assert authenticate("админ", "лозинка", settings) is True
    assert authenticate("админ", "друга", settings) is False


def test_password_hash_takes_precedence():
    settings = _settings(
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="plain",
        ADMIN_PASSWORD_HASH=get_password_hash("s3cret", rounds=4),
    )

    assert authenticate("admin", "s3cret", settings) is True
    assert authenticate("admin", "plain", settings) is False


def test_hash_roundtrip():
    hashed = get_password_hash("s3cret", rounds=4)

    assert hashed.startswith("$2b$04$")
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)


def test_malformed_hash_does_not_verify():
    assert verify_password("s3cret", "not-a-bcrypt-hash") is False


def test_generate_mfa_secret():
    secret, uri = generate_mfa_secret("e-cenovnik.mk (admin)", issuer="e-cenovnik.mk")

    assert len(secret) == 32
    assert uri.startswith("otpauth://totp/")
    assert f"secret={secret}" in uri

    totp = pyotp.TOTP(secret)
    assert totp.verify(totp.now())

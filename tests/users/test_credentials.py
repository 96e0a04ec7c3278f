from __future__ import annotations

import hashlib
import math

import pytest

from src.headcount_system.headcount_system.core.constants import TEMP_PASSWORD_ALPHABET
from src.headcount_system.headcount_system.core.enums import Role
from src.headcount_system.headcount_system.core.exceptions import DuplicateUsernameError, UserNotFoundError
from src.headcount_system.headcount_system.users.credentials import (
    check_password,
    generate_salt,
    generate_temporary_password,
    hash_password,
)


def test_hash_is_sha256_of_password_then_salt():
    expected = hashlib.sha256(b"secretabc").hexdigest()
    assert hash_password("secret", "abc") == expected


def test_salts_are_fresh_and_long_enough():
    salts = {generate_salt() for _ in range(20)}
    assert len(salts) == 20
    assert all(len(s) >= 32 for s in salts)
    assert all(s.isalnum() and s.isascii() for s in salts)
    # 62-symbol alphabet: at least 16 random bytes of entropy.
    assert min(len(s) for s in salts) * math.log2(62) >= 128


def test_check_password_round_trip():
    salt = generate_salt()
    stored = hash_password("pw123456", salt)
    assert check_password(stored, salt, "pw123456")
    assert not check_password(stored, salt, "pw1234567")


def test_temporary_password_uses_unambiguous_alphabet():
    pwd = generate_temporary_password()
    assert len(pwd) == 12
    assert set(pwd) <= set(TEMP_PASSWORD_ALPHABET)
    for confusable in "0O1lI":
        assert confusable not in TEMP_PASSWORD_ALPHABET

    assert len(generate_temporary_password(20)) == 20


def test_create_user_rejects_exact_duplicate_but_is_case_sensitive(container):
    creds = container.credential_service
    creds.create_user("maria", "pw123456", Role.USER, ["Spool Yard"])

    with pytest.raises(DuplicateUsernameError):
        creds.create_user("maria", "other", Role.USER)

    creds.create_user("Maria", "other", Role.USER)
    assert [u.username for u in container.users_repo.list_all()] == ["maria", "Maria"]


def test_created_user_is_enabled_with_salted_hash(container, fixed_now):
    user = container.credential_service.create_user("maria", "pw123456", Role.USER, ["PWHT", "PWHT"])

    assert user.disabled is False
    assert user.assigned_areas == ("PWHT",)
    assert user.password_hash != "pw123456"
    assert user.password_hash == hash_password("pw123456", user.salt)
    assert user.created_at is not None


def test_verify(container):
    creds = container.credential_service
    creds.create_user("maria", "pw123456", Role.USER)

    assert creds.verify("maria", "pw123456")
    assert not creds.verify("maria", "wrong")
    assert not creds.verify("nobody", "pw123456")


def test_reset_password_replaces_salt_and_hash_together(container):
    creds = container.credential_service
    before = creds.create_user("maria", "pw123456", Role.USER)

    after = creds.reset_password("maria", "n3wpass!")

    stored = container.users_repo.get_by_username("maria")
    assert stored.salt == after.salt != before.salt
    assert stored.password_hash == hash_password("n3wpass!", stored.salt)
    assert creds.verify("maria", "n3wpass!")
    assert not creds.verify("maria", "pw123456")


def test_reset_password_unknown_user(container):
    with pytest.raises(UserNotFoundError):
        container.credential_service.reset_password("ghost", "whatever")

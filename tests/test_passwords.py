import pytest

from marketcore.passwords import BCRYPT_COST, hash_password, verify_password


def test_hash_verifies_against_original():
    password = "password"
    hashed = hash_password(password)
    assert verify_password(hashed, password) is True


def test_wrong_password_does_not_verify():
    password = "password"
    hashed = hash_password(password)
    assert verify_password(hashed, "secret") is False


def test_hash_uses_configured_cost():
    hashed = hash_password("secret")
    assert hashed.startswith("$2")
    assert hashed.split("$")[2] == f"{BCRYPT_COST:02d}" == "12"


def test_hashes_are_salted():
    password = "password"
    first = hash_password(password)
    second = hash_password(password)
    assert first != second
    assert verify_password(first, password) and verify_password(second, password)


def test_malformed_hash_does_not_verify():
    assert verify_password("not-a-hash", "password") is False


def test_overlong_password_is_rejected():
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_overlong_password_never_verifies():
    hashed = hash_password("x" * 72)
    assert verify_password(hashed, "x" * 73) is False
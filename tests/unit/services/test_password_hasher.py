"""
Unit tests for the bcrypt password hasher
"""

from src.adapter.services.password_hasher import BcryptPasswordHasher


def test_hash_is_salted_and_not_plaintext(password_hasher):
    first = password_hasher.hash("Passw0rd!")
    second = password_hasher.hash("Passw0rd!")

    assert first != "Passw0rd!"
    assert first != second
    assert first.startswith("$2b$04$")


def test_verify_correct_and_wrong_password(password_hasher):
    password_hash = password_hasher.hash("Passw0rd!")

    assert password_hasher.verify("Passw0rd!", password_hash) is True
    assert password_hasher.verify("passw0rd!", password_hash) is False


def test_verify_malformed_hash_returns_false(password_hasher):
    assert password_hasher.verify("Passw0rd!", "not-a-bcrypt-hash") is False


def test_configurable_cost_factor():
    hasher = BcryptPasswordHasher(rounds=5)

    assert hasher.hash("Passw0rd!").startswith("$2b$05$")


def test_dummy_verify_does_not_raise(password_hasher):
    assert password_hasher.dummy_verify("anything") is None

from __future__ import annotations

import pytest

from accounts.core.security import CredentialHasher
from accounts.services.errors import InvalidCredentialsError


@pytest.fixture()
def owner(services, owner_role):
    return services.users.register(
        email="ana@example.com",
        business_name="Ana Bakery",
        phone_number="+5511999990000",
        password="s3cret-pass",
        first_name="Ana",
        last_name="Silva",
    )


def test_login_by_email(services, owner):
    user = services.users.login("Ana Bakery", "ana@example.com", "s3cret-pass")

    assert user.id == owner.id
    assert user.role.name == "Owner"
    assert [b.name for b in user.businesses] == ["Ana Bakery"]


def test_login_by_phone_number(services, owner):
    user = services.users.login("Ana Bakery", "+5511999990000", "s3cret-pass")

    assert user.id == owner.id


def test_unknown_identifier_is_rejected(services, owner, monkeypatch):
    calls = []
    monkeypatch.setattr(services.users.hasher, "verify", lambda *a: calls.append(a) or True)

    with pytest.raises(InvalidCredentialsError) as exc_info:
        services.users.login("Ana Bakery", "nobody@example.com", "s3cret-pass")

    assert exc_info.value.messages == {"phoneNumberOrEmail": "Invalid credentials"}
    assert exc_info.value.status_code == 400
    assert calls == []


def test_wrong_password_is_rejected(services, owner):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        services.users.login("Ana Bakery", "ana@example.com", "wrong-pass")

    assert exc_info.value.messages == {"password": "Invalid credentials"}


def test_business_outside_membership_is_rejected(services, owner):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        services.users.login("Someone Else Inc", "ana@example.com", "s3cret-pass")

    assert exc_info.value.messages == {"businessName": "Invalid credentials"}


def test_business_name_match_is_exact(services, owner):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        services.users.login("ana bakery", "ana@example.com", "s3cret-pass")

    assert set(exc_info.value.messages) == {"businessName"}


def test_login_upgrades_hash_made_with_older_cost(services, owner, repo):
    old_hash = CredentialHasher(cost=2).hash("s3cret-pass")
    repo.update_user_password(owner.id, old_hash)

    user = services.users.login("Ana Bakery", "ana@example.com", "s3cret-pass")

    stored = repo.get_user(owner.id)
    assert stored.password_hash != old_hash
    assert stored.password_hash == user.password_hash
    assert not services.users.hasher.needs_rehash(stored.password_hash)

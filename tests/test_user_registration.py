from __future__ import annotations

import pytest

from accounts.services.errors import ConflictError, NotFoundError

OWNER = dict(
    email="ana@example.com",
    business_name="Ana Bakery",
    phone_number="+5511999990000",
    password="s3cret-pass",
    first_name="Ana",
    last_name="Silva",
)


def _register(services, **overrides):
    data = {**OWNER, **overrides}
    return services.users.register(**data)


def test_register_persists_user_with_owner_role_and_business(services, owner_role, repo):
    user = _register(services)

    assert user.password_hash != OWNER["password"]
    assert user.role.name == "Owner"
    assert [b.name for b in user.businesses] == ["Ana Bakery"]
    assert user.token

    stored = repo.get_user_by_email("ana@example.com")
    assert stored is not None
    assert stored.id == user.id
    assert len(stored.businesses) == 1
    assert stored.token == user.token
    assert len(repo.find_users_by_email_or_phone("ana@example.com", "+5511999990000")) == 1


def test_register_sends_verification_link_with_token(services, owner_role, outbox, settings):
    user = _register(services)

    assert len(outbox.messages) == 1
    message = outbox.messages[0]
    assert message["to"] == "ana@example.com"
    assert f"{settings.public_base_url}/verification?token={user.token}" in message["text"]


def test_register_reuses_existing_business(services, owner_role):
    first = _register(services)
    second = _register(services, email="bia@example.com", phone_number="+5511888880000")

    assert first.businesses[0].id == second.businesses[0].id


def test_duplicate_email_reports_only_email(services, owner_role):
    _register(services)

    with pytest.raises(ConflictError) as exc_info:
        _register(services, phone_number="+5511777770000")

    assert exc_info.value.messages == {"email": "Email already exist"}
    assert exc_info.value.status_code == 409


def test_duplicate_phone_reports_only_phone(services, owner_role):
    _register(services)

    with pytest.raises(ConflictError) as exc_info:
        _register(services, email="other@example.com")

    assert exc_info.value.messages == {"phoneNumber": "Phone Number already exist"}


def test_same_email_and_phone_as_single_user_reports_both(services, owner_role):
    _register(services)

    with pytest.raises(ConflictError) as exc_info:
        _register(services)

    assert set(exc_info.value.messages) == {"email", "phoneNumber"}


def test_email_and_phone_matching_two_users_reports_both(services, owner_role):
    _register(services)
    _register(services, email="bia@example.com", phone_number="+5511888880000")

    with pytest.raises(ConflictError) as exc_info:
        _register(services, email="ana@example.com", phone_number="+5511888880000")

    assert exc_info.value.messages == {
        "email": "Email already exist",
        "phoneNumber": "Phone Number already exist",
    }


def test_conflict_does_not_send_email_or_persist(services, owner_role, outbox, repo):
    _register(services)
    outbox.messages.clear()

    with pytest.raises(ConflictError):
        _register(services, phone_number="+5511777770000", business_name="Other Shop")

    assert outbox.messages == []
    assert repo.get_business_by_name("Other Shop") is None


def test_register_without_owner_role_fails(services, repo):
    with pytest.raises(NotFoundError):
        _register(services)

    assert repo.get_user_by_email("ana@example.com") is None


def test_register_succeeds_when_email_delivery_fails(services, owner_role, outbox, repo):
    outbox.result = False

    user = _register(services)

    assert repo.get_user(user.id) is not None
    assert len(outbox.messages) == 1


def test_race_on_unique_email_surfaces_as_conflict(services, owner_role, monkeypatch):
    _register(services)
    repository = services.users.repository
    real_lookup = repository.find_users_by_email_or_phone
    calls = []

    def _miss_first_time(email, phone_number):
        calls.append(email)
        if len(calls) == 1:
            return []
        return real_lookup(email, phone_number)

    monkeypatch.setattr(repository, "find_users_by_email_or_phone", _miss_first_time)

    with pytest.raises(ConflictError) as exc_info:
        _register(services, phone_number="+5511777770000")

    assert exc_info.value.messages == {"email": "Email already exist"}
    assert len(calls) == 2

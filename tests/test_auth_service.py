from datetime import timedelta

import pytest
from sqlmodel import select

from qa_forum.models.db import get_session
from qa_forum.models.user_account import SessionToken, UserAccount, UserRole
from qa_forum.services.auth_service import AuthService
from qa_forum.services.errors import EmailAlreadyExists, Unauthenticated
from qa_forum.utils.clock import utc_now

DEFAULT_PASSWORD = "password123"


def _session_count() -> int:
    with get_session() as session:
        return len(session.exec(select(SessionToken)).all())


def test_register_hashes_password(auth_service):
    user = auth_service.register_user("alice", "alice@example.com", "s3cret-password")

    assert user.id is not None
    assert user.role == UserRole.USER
    assert user.password_hash != "s3cret-password"
    assert user.password_hash.startswith("$2")


def test_register_rejects_duplicate_email(auth_service):
    auth_service.register_user("alice", "alice@example.com", DEFAULT_PASSWORD)
    with pytest.raises(EmailAlreadyExists):
        auth_service.register_user("alice2", "alice@example.com", DEFAULT_PASSWORD)


def test_login_then_validate_resolves_same_user(auth_service, author):
    token = auth_service.login(author.email, DEFAULT_PASSWORD)

    assert len(token) == 64
    assert auth_service.validate_token(token).id == author.id
    assert _session_count() == 1


def test_each_login_creates_a_new_session(auth_service, author):
    first = auth_service.login(author.email, DEFAULT_PASSWORD)
    second = auth_service.login(author.email, DEFAULT_PASSWORD)

    assert first != second
    assert _session_count() == 2


@pytest.mark.parametrize(
    "email,password",
    [
        ("user1@example.com", "wrong-password"),
        ("nobody@example.com", DEFAULT_PASSWORD),
    ],
)
def test_login_with_bad_credentials(auth_service, author, email, password):
    with pytest.raises(Unauthenticated) as exc_info:
        auth_service.login(email, password)

    assert exc_info.value.detail == "invalid_credentials"
    assert _session_count() == 0


def test_logout_invalidates_token(auth_service, author):
    token = auth_service.login(author.email, DEFAULT_PASSWORD)
    auth_service.logout(token)

    with pytest.raises(Unauthenticated):
        auth_service.validate_token(token)
    assert _session_count() == 0


def test_logout_unknown_token_is_noop(auth_service, author):
    token = auth_service.login(author.email, DEFAULT_PASSWORD)

    auth_service.logout("not-a-real-token")
    auth_service.logout(token)
    auth_service.logout(token)

    assert _session_count() == 0


def test_validate_unknown_token(auth_service):
    with pytest.raises(Unauthenticated):
        auth_service.validate_token("deadbeef")


def test_expired_token_is_rejected_and_removed(author):
    service = AuthService(session_ttl_hours=1)
    token = service.login(author.email, DEFAULT_PASSWORD)

    with get_session() as session:
        record = session.exec(select(SessionToken).where(SessionToken.token == token)).one()
        assert record.expires_at is not None
        record.expires_at = utc_now() - timedelta(seconds=1)
        session.add(record)
        session.commit()

    with pytest.raises(Unauthenticated):
        service.validate_token(token)
    assert _session_count() == 0


def test_zero_ttl_disables_expiry(author):
    service = AuthService(session_ttl_hours=0)
    record = service.create_token(author.id)

    assert record.expires_at is None
    assert not record.is_expired(utc_now() + timedelta(days=3650))


def test_ensure_default_admin_is_idempotent(auth_service):
    auth_service.ensure_default_admin(email="root@example.com", password="rootpassword")
    auth_service.ensure_default_admin(email="other@example.com", password="rootpassword")

    with get_session() as session:
        admins = session.exec(
            select(UserAccount).where(UserAccount.role == UserRole.ADMIN.value)
        ).all()
    assert [admin.email for admin in admins] == ["root@example.com"]
    assert auth_service.login("root@example.com", "rootpassword")


def test_naive_expiry_is_read_as_utc(author):
    record = AuthService(session_ttl_hours=1).create_token(author.id)
    naive_expiry = record.expires_at.replace(tzinfo=None)
    record.expires_at = naive_expiry

    assert not record.is_expired(naive_expiry - timedelta(minutes=1))
    assert record.is_expired(utc_now() + timedelta(hours=2))

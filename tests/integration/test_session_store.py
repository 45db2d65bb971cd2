import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError
from models.users import User
from models.sessions import UserSession
from utils.crypto import fingerprint


def create_user(store, email="store_test@example.com"):
    with store.atomic():
        return store.create_user(email=email, hashed_password="not-a-real-hash")


def create_session(store, user_id, secret="initial-secret", expires_in=timedelta(days=1)):
    with store.atomic():
        return store.create_session(
            user_id=user_id,
            refresh_hash=fingerprint(secret),
            expires_at=datetime.now(timezone.utc) + expires_in
        )


def test_create_and_find_user(store):
    user = create_user(store)

    assert user.id is not None
    assert store.find_user_by_email("store_test@example.com").id == user.id
    assert store.find_user_by_id(user.id).email == "store_test@example.com"
    assert user.is_active is True
    assert user.is_email_verified is False
    assert user.last_login_at is None


def test_find_missing_user(store):
    assert store.find_user_by_email("nobody@example.com") is None
    assert store.find_user_by_id("missing-id") is None


def test_duplicate_email_rejected_by_database(store):
    create_user(store)

    with pytest.raises(IntegrityError):
        create_user(store)


def test_atomic_rolls_back_every_write(store, session):
    with pytest.raises(RuntimeError):
        with store.atomic():
            user = store.create_user(email="rollback@example.com", hashed_password="x")
            store.create_session(
                user_id=user.id,
                refresh_hash=fingerprint("secret"),
                expires_at=datetime.now(timezone.utc) + timedelta(days=1)
            )
            raise RuntimeError("boom")

    assert store.find_user_by_email("rollback@example.com") is None
    assert session.query(UserSession).count() == 0


def test_update_last_login(store, session):
    user = create_user(store)
    when = datetime.now(timezone.utc)

    with store.atomic():
        store.update_user_last_login(user.id, when)

    assert session.get(User, user.id).last_login_at is not None


def test_create_and_find_session(store):
    user = create_user(store)
    created = create_session(store, user.id)

    found = store.find_session_by_id(created.id)
    assert found is not None
    assert found.user_id == user.id
    assert found.refresh_hash == fingerprint("initial-secret")
    assert found.revoked_at is None


def test_rotate_session_is_compare_and_swap(store):
    user = create_user(store)
    created = create_session(store, user.id)
    new_expiry = datetime.now(timezone.utc) + timedelta(days=30)

    with store.atomic():
        first = store.rotate_session(created.id, fingerprint("initial-secret"), fingerprint("second"), new_expiry)
    with store.atomic():
        second = store.rotate_session(created.id, fingerprint("initial-secret"), fingerprint("third"), new_expiry)

    assert first is True
    assert second is False
    assert store.find_session_by_id(created.id).refresh_hash == fingerprint("second")


def test_rotate_revoked_session_fails(store):
    user = create_user(store)
    created = create_session(store, user.id)

    with store.atomic():
        store.revoke_session(created.id)
    with store.atomic():
        rotated = store.rotate_session(
            created.id,
            fingerprint("initial-secret"),
            fingerprint("second"),
            datetime.now(timezone.utc) + timedelta(days=1)
        )

    assert rotated is False


def test_revoke_session_only_once(store):
    user = create_user(store)
    created = create_session(store, user.id)

    with store.atomic():
        assert store.revoke_session(created.id) is True
    revoked_at = store.find_session_by_id(created.id).revoked_at
    assert revoked_at is not None

    with store.atomic():
        assert store.revoke_session(created.id) is False
    assert store.find_session_by_id(created.id).revoked_at == revoked_at


def test_revoke_missing_session(store):
    with store.atomic():
        assert store.revoke_session("missing-id") is False


def test_update_user_profile(store):
    user = create_user(store)

    with store.atomic():
        updated = store.update_user_profile(user.id, "New Name")
    assert updated.display_name == "New Name"

    with store.atomic():
        assert store.update_user_profile("missing-id", "Name") is None

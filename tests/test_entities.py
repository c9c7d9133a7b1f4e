"""Tests for the User domain entity."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.core import ValidationException
from src.users.domain import User


pytestmark = pytest.mark.unit


def test_new_user_gets_id_and_timestamps() -> None:
    user = User.new("John Doe", "john@example.com")

    assert user.id is not None
    assert user.created_at == user.updated_at
    assert user.created_at.tzinfo is not None
    assert user.deleted_at is None
    assert not user.is_deleted


def test_new_users_have_distinct_ids() -> None:
    ids = {User.new("Jane", f"jane{i}@example.com").id for i in range(20)}
    assert len(ids) == 20


def test_name_is_stripped() -> None:
    assert User.new("  Ada Lovelace ", "ada@example.com").name == "Ada Lovelace"


@pytest.mark.parametrize("name", ["", "   ", None, "x" * 256])
def test_invalid_name_rejected(name) -> None:
    with pytest.raises(ValidationException) as exc_info:
        User.new(name, "ok@example.com")
    assert exc_info.value.error_code == "validation_error"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("email", ["", "not-an-email", "a@", "@example.com", "two@@example.com"])
def test_invalid_email_rejected(email: str) -> None:
    with pytest.raises(ValidationException):
        User.new("Someone", email)


def test_email_domain_is_normalized() -> None:
    user = User.new("Someone", "Someone@EXAMPLE.com")
    assert user.email == "Someone@example.com"


def test_updated_at_before_created_at_rejected() -> None:
    now = datetime.now(timezone.utc)
    with pytest.raises(ValueError):
        User(
            id=uuid4(),
            name="Bad",
            email="bad@example.com",
            created_at=now,
            updated_at=now - timedelta(seconds=1)
        )


def test_touch_always_advances_updated_at() -> None:
    user = User.new("Clock", "clock@example.com")
    before = user.updated_at

    # A timestamp in the past must still move updated_at forward
    user.touch(before - timedelta(hours=1))

    assert user.updated_at > before


def test_change_email_reports_change() -> None:
    user = User.new("Mail", "mail@example.com")

    assert user.change_email("mail@example.com") is False
    assert user.change_email("other@example.com") is True
    assert user.email == "other@example.com"


def test_mark_deleted_is_idempotent() -> None:
    user = User.new("Gone", "gone@example.com")
    user.mark_deleted()
    first = user.deleted_at

    user.mark_deleted()

    assert user.is_deleted
    assert user.deleted_at == first

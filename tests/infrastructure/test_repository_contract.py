"""Behaviour shared by every notification repository implementation."""

from __future__ import annotations

import pytest

from notifyhub.domain.entities import NotificationRecipient, NotificationStatus
from notifyhub.domain.exceptions import NotFoundError, ValidationError
from notifyhub.domain.repositories import NO_CHANGE, NotificationRepository
from notifyhub.infrastructure.repositories import (
    InMemoryNotificationRepository,
    SqlAlchemyNotificationRepository,
)

ALICE = NotificationRecipient("user", "alice")
BOB = NotificationRecipient("user", "bob")
OPS = NotificationRecipient("group", "ops")


@pytest.fixture(params=["memory", "sqlalchemy"])
def repository(request) -> NotificationRepository:
    if request.param == "memory":
        return InMemoryNotificationRepository()
    return SqlAlchemyNotificationRepository(request.getfixturevalue("db_session"))


def test_add_range_assigns_sequential_ids(repository, make_notification) -> None:
    notifications = [make_notification(entity_id=str(index)) for index in range(3)]

    assert repository.add_range(notifications) == 3

    assert [repository.get_notification(index).entity_id for index in (1, 2, 3)] == [
        "0",
        "1",
        "2",
    ]


def test_add_range_with_nothing_stores_nothing(repository) -> None:
    assert repository.add_range([]) == 0
    assert repository.get_notifications([ALICE], 0, 10, True).total_count == 0


def test_get_unknown_notification_raises(repository) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        repository.get_notification(404)

    assert exc_info.value.notification_id == 404


def test_fetched_notifications_change_only_through_save(repository, make_notification) -> None:
    repository.add_range([make_notification()])

    fetched = repository.get_notification(1)
    fetched.mark_as_read()
    assert repository.get_notification(1).status is NotificationStatus.UNREAD

    assert repository.save(fetched) == 1
    assert repository.get_notification(1).status is NotificationStatus.READ


def test_save_requires_a_stored_notification(repository, make_notification) -> None:
    transient = make_notification()
    with pytest.raises(ValidationError):
        repository.save(transient)

    transient.id = 12
    with pytest.raises(NotFoundError):
        repository.save(transient)


def test_transitions_return_no_change_sentinel(repository, make_notification) -> None:
    repository.add_range([make_notification()])

    assert repository.archive(1) == 1
    assert repository.archive(1) == NO_CHANGE
    archived = repository.get_notification(1)
    assert archived.archived is True
    assert archived.archived_on is not None

    assert repository.un_archive(1) == 1
    assert repository.un_archive(1) == NO_CHANGE
    restored = repository.get_notification(1)
    assert restored.archived_on is None
    assert restored.status is NotificationStatus.READ

    assert repository.mark_as_read(1) == NO_CHANGE
    assert repository.mark_as_unread(1) == 1
    assert repository.mark_as_unread(1) == NO_CHANGE
    assert repository.mark_as_read(1) == 1


@pytest.mark.parametrize(
    "operation", ["archive", "un_archive", "mark_as_read", "mark_as_unread"]
)
def test_transitions_on_missing_notification_raise(repository, operation: str) -> None:
    with pytest.raises(NotFoundError):
        getattr(repository, operation)(8)


def test_archived_notifications_are_hidden_by_default(repository, make_notification) -> None:
    repository.add_range([make_notification(entity_id=str(index)) for index in range(4)])
    repository.archive(2)
    repository.archive(4)

    hidden = repository.get_notifications([ALICE], 0, 10, False)
    shown = repository.get_notifications([ALICE], 0, 10, True)

    assert hidden.total_count == 2
    assert [notification.id for notification in hidden.results] == [3, 1]
    assert shown.total_count == 4
    assert [notification.id for notification in shown.results] == [4, 3, 2, 1]


def test_results_are_restricted_to_the_recipients(repository, make_notification) -> None:
    repository.add_range(
        [
            make_notification(recipient_id="alice"),
            make_notification(recipient_id="bob"),
            make_notification(recipient_type="group", recipient_id="ops"),
            make_notification(recipient_type="group", recipient_id="alice"),
        ]
    )

    page = repository.get_notifications([ALICE, OPS], 0, 10, False)

    assert [notification.id for notification in page.results] == [3, 1]
    assert repository.get_notifications([], 0, 10, True).total_count == 0


def test_title_filter_matches_summary_or_description(repository, make_notification) -> None:
    repository.add_range(
        [
            make_notification(summary="Invoice paid", description="Thanks"),
            make_notification(summary="Reminder", description="Your INVOICE is due"),
            make_notification(summary="Welcome", description="Hello there"),
            make_notification(summary="Sale", description="50% off today"),
            make_notification(summary="Échec de paiement", description="Card declined"),
        ]
    )

    invoices = repository.get_notifications([ALICE], 0, 10, False, "invoice")
    percent = repository.get_notifications([ALICE], 0, 10, False, "50%")
    accented = repository.get_notifications([ALICE], 0, 10, False, "Échec")

    assert [notification.id for notification in invoices.results] == [2, 1]
    assert invoices.total_count == 2
    assert [notification.id for notification in percent.results] == [4]
    assert [notification.id for notification in accented.results] == [5]
    assert accented.total_count == 1


def test_pages_are_ordered_newest_first(repository, make_notification) -> None:
    repository.add_range([make_notification(entity_id=str(index)) for index in range(25)])

    last_page = repository.get_notifications([ALICE], 2, 10, False)
    first_page = repository.get_notifications([ALICE], 0, 10, False)

    assert last_page.total_count == 25
    assert [notification.id for notification in last_page.results] == [5, 4, 3, 2, 1]
    assert first_page.results[0].id == 25
    assert len(first_page.results) == 10


@pytest.mark.parametrize(("page_index", "page_size"), [(-1, 10), (0, 0)])
def test_invalid_pages_are_rejected(repository, page_index: int, page_size: int) -> None:
    with pytest.raises(ValidationError):
        repository.get_notifications([ALICE], page_index, page_size, False)


def test_unread_count_per_recipient(repository, make_notification) -> None:
    repository.add_range(
        [
            make_notification(),
            make_notification(),
            make_notification(recipient_id="bob"),
        ]
    )
    repository.mark_as_read(1)

    assert repository.not_read_notification_count([ALICE]) == 1
    assert repository.not_read_notification_count([ALICE, BOB]) == 2
    assert repository.not_read_notification_count([]) == 0

"""Tests specific to the in-memory notification repository."""

from __future__ import annotations

import copy
import threading
import types

import pytest

from notifyhub.domain.entities import NotificationRecipient
from notifyhub.infrastructure.repositories import InMemoryNotificationRepository
from notifyhub.infrastructure.repositories import memory_repository

ALICE = NotificationRecipient("user", "alice")


@pytest.fixture
def repository() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


def test_add_range_leaves_the_published_objects_untouched(
    repository, make_notification
) -> None:
    notification = make_notification()

    repository.add_range([notification])

    assert notification.id is None
    assert repository.get_notification(1).id == 1


def test_page_copies_are_taken_while_holding_the_lock(
    repository, make_notification, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Stored notifications are never copied while a save could change them."""

    repository.add_range([make_notification(), make_notification()])
    held: list[bool] = []

    def checking_deepcopy(value):
        held.append(repository._lock.locked())
        return copy.deepcopy(value)

    monkeypatch.setattr(
        memory_repository, "copy", types.SimpleNamespace(deepcopy=checking_deepcopy)
    )

    page = repository.get_notifications([ALICE], 0, 10, True)

    assert page.total_count == 2
    assert held == [True]


def test_reads_never_see_half_applied_saves(repository, make_notification) -> None:
    repository.add_range([make_notification() for _ in range(20)])
    stop = threading.Event()

    def toggle_archive() -> None:
        while not stop.is_set():
            for notification_id in range(1, 21):
                repository.archive(notification_id)
                repository.un_archive(notification_id)

    writer = threading.Thread(target=toggle_archive)
    writer.start()
    try:
        for _ in range(200):
            page = repository.get_notifications([ALICE], 0, 20, True)
            for notification in page.results:
                assert notification.archived == (notification.archived_on is not None)
            assert repository.not_read_notification_count([ALICE]) <= 20
    finally:
        stop.set()
        writer.join()

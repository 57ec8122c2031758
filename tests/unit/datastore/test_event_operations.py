"""Unit tests for Datastore event operations."""

from datetime import datetime, timedelta

import pytest

from campusevents.datastore import (
    Datastore,
    EventNotFoundError,
    EventStatus,
    RegistrationNotFoundError,
    UserNotFoundError,
    utc_now,
)


@pytest.mark.unit
class TestCreateEvent:
    """Tests for create_event."""

    def test_create_event_minimal(self, store: Datastore, admin) -> None:
        """Create with required fields only."""
        when = datetime(2030, 5, 1, 18, 0)
        event = store.create_event(
            title="Concert", venue="Quad", event_date=when, created_by_id=admin.id
        )

        assert event.id is not None
        assert event.title == "Concert"
        assert event.event_date == when
        assert event.max_participants is None
        assert event.status == EventStatus.PENDING.value
        assert event.created_by_id == admin.id
        assert event.created_at is not None

    def test_create_event_unknown_creator_raises(self, store: Datastore) -> None:
        """UserNotFoundError when creator doesn't exist."""
        with pytest.raises(UserNotFoundError):
            store.create_event(
                title="Concert",
                venue="Quad",
                event_date=datetime(2030, 5, 1),
                created_by_id="ghost",
            )


@pytest.mark.unit
class TestGetEvent:
    """Tests for get_event."""

    def test_get_event_exists(self, store: Datastore, make_event) -> None:
        """Returns correct event."""
        created = make_event(title="Talk")

        assert store.get_event(created.id).title == "Talk"

    def test_get_event_not_found_raises(self, store: Datastore) -> None:
        """EventNotFoundError for invalid ID."""
        with pytest.raises(EventNotFoundError) as exc_info:
            store.get_event("nonexistent-id")

        assert "nonexistent-id" in str(exc_info.value)


@pytest.mark.unit
class TestListEvents:
    """Tests for list_events."""

    def test_list_events_ordered_by_date(self, store: Datastore, make_event) -> None:
        """Events come back soonest first."""
        now = utc_now()
        make_event(title="Later", event_date=now + timedelta(days=10))
        make_event(title="Sooner", event_date=now + timedelta(days=1))

        assert [e.title for e in store.list_events()] == ["Sooner", "Later"]

    def test_list_events_filter_by_status(self, store: Datastore, make_event) -> None:
        """Status filter applies."""
        approved = make_event(title="Approved")
        make_event(title="Pending")
        store.update_event(approved.id, status=EventStatus.APPROVED)

        result = store.list_events(status=EventStatus.APPROVED)

        assert [e.title for e in result] == ["Approved"]

    def test_list_events_date_window_is_closed(self, store: Datastore, make_event) -> None:
        """start and end bounds are inclusive."""
        base = datetime(2030, 1, 1, 12, 0)
        make_event(title="Before", event_date=base - timedelta(seconds=1))
        make_event(title="AtStart", event_date=base)
        make_event(title="AtEnd", event_date=base + timedelta(days=1))
        make_event(title="After", event_date=base + timedelta(days=1, seconds=1))

        result = store.list_events(start=base, end=base + timedelta(days=1))

        assert [e.title for e in result] == ["AtStart", "AtEnd"]


@pytest.mark.unit
class TestUpdateEvent:
    """Tests for update_event."""

    def test_update_event_partial(self, store: Datastore, make_event) -> None:
        """Only provided fields are updated."""
        event = make_event(title="Old", venue="Hall A", max_participants=10)

        updated = store.update_event(event.id, title="New", max_participants=20)

        assert updated.title == "New"
        assert updated.venue == "Hall A"
        assert updated.max_participants == 20

    def test_update_event_status_and_reason(self, store: Datastore, make_event) -> None:
        """Moderation fields are stored."""
        event = make_event()

        updated = store.update_event(
            event.id, status=EventStatus.REJECTED, rejection_reason="Venue unavailable"
        )

        assert updated.status == "REJECTED"
        assert updated.rejection_reason == "Venue unavailable"

    def test_update_event_not_found_raises(self, store: Datastore) -> None:
        """EventNotFoundError for invalid ID."""
        with pytest.raises(EventNotFoundError):
            store.update_event("nonexistent-id", title="x")


@pytest.mark.unit
class TestDeleteEvent:
    """Tests for delete_event."""

    def test_delete_event(self, store: Datastore, make_event) -> None:
        """Event is removed."""
        event = make_event()

        store.delete_event(event.id)

        with pytest.raises(EventNotFoundError):
            store.get_event(event.id)

    def test_delete_event_cascades_registrations(
        self, store: Datastore, make_event, student
    ) -> None:
        """Registrations of a deleted event are removed too."""
        event = make_event()
        registration = store.add_registration(event.id, student.id, registered_at=utc_now())

        store.delete_event(event.id)

        with pytest.raises(RegistrationNotFoundError):
            store.get_registration(registration.id)

    def test_delete_event_not_found_raises(self, store: Datastore) -> None:
        """EventNotFoundError for invalid ID."""
        with pytest.raises(EventNotFoundError):
            store.delete_event("nonexistent-id")

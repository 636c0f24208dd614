"""Unit tests for RegistrationService.

Covers the capacity bound, duplicate prevention and the upcoming listing.
Run with: pytest tests/test_registrations.py -v
"""

import random
from datetime import timedelta

import pytest

from events.domain import Actor, AuditAction, Role
from events.domain.errors import (
    ConflictError,
    DuplicateRegistrationError,
    ErrorCode,
    EventFullError,
    EventNotFoundError,
    ForbiddenError,
    InvalidStatusError,
    RegistrationNotFoundError,
    ValidationFailedError,
)


def _live(services, admin, event):
    return services.catalog.get_event(admin, event.id).registrations_count


class TestRegister:
    def test_scenario_full_and_duplicate(self, services, admin, make_event, make_member):
        event = make_event(title="E1", capacity=1)

        services.registrations.register(make_member("m1"), event.id)
        assert _live(services, admin, event) == 1

        with pytest.raises(DuplicateRegistrationError) as excinfo:
            services.registrations.register(make_member("m1"), event.id)
        assert excinfo.value.code is ErrorCode.DUPLICATE_REGISTRATION

        with pytest.raises(EventFullError) as excinfo:
            services.registrations.register(make_member("m2"), event.id)
        assert excinfo.value.code is ErrorCode.EVENT_FULL
        assert _live(services, admin, event) == 1

    def test_scenario_cancel_frees_seat(self, services, admin, make_event, make_member):
        event = make_event(title="E1", capacity=1)
        services.registrations.register(make_member("m1"), event.id)

        services.registrations.cancel_registration(make_member("m1"), event.id)
        assert _live(services, admin, event) == 0

        services.registrations.register(make_member("m2"), event.id)
        assert _live(services, admin, event) == 1

    def test_scenario_capacity_floor_and_conflict(
        self, services, admin, make_event, make_member
    ):
        event = make_event(title="E1", capacity=1)
        services.registrations.register(make_member("m1"), event.id)

        with pytest.raises(ValidationFailedError) as excinfo:
            services.catalog.update_capacity(admin, event.id, 0)
        assert excinfo.value.has_issue("capacity", "below_registrations")

        with pytest.raises(ConflictError):
            services.catalog.update_capacity(admin, event.id, 1)

    def test_defaults_member_to_caller(self, services, make_event, member):
        event = make_event()
        registration = services.registrations.register(member, event.id)

        assert registration.member_id == "m1"
        assert registration.tenant_id == "t1"
        assert registration.reminder_count == 0
        assert registration.reminder_sent_at is None

    def test_unbounded_event_accepts_everyone(self, services, admin, make_event, make_member):
        event = make_event(capacity=None)
        for index in range(30):
            services.registrations.register(make_member(f"m{index}"), event.id)
        assert _live(services, admin, event) == 30

    def test_zero_capacity_is_always_full(self, services, make_event, member):
        event = make_event(capacity=0)
        with pytest.raises(EventFullError):
            services.registrations.register(member, event.id)

    def test_draft_event_is_invalid_status(self, services, make_event, member):
        draft = make_event(publish=False)
        with pytest.raises(InvalidStatusError) as excinfo:
            services.registrations.register(member, draft.id)
        assert excinfo.value.code is ErrorCode.INVALID_STATUS

    def test_unknown_event_is_not_found(self, services, member):
        with pytest.raises(EventNotFoundError):
            services.registrations.register(member, "12345678-1234-5678-1234-567812345678")

    def test_requires_member_role(self, services, admin, make_event):
        event = make_event()
        with pytest.raises(ForbiddenError):
            services.registrations.register(admin, event.id)

    def test_registration_is_audited(self, services, admin, make_event, member):
        event = make_event()
        registration = services.registrations.register(member, event.id)

        record = services.audit.list_records(admin, event.id)[-1]
        assert record.action is AuditAction.REGISTRATION_CREATED
        assert record.actor_id == "m1"
        assert record.meta == {"registration_id": str(registration.id), "member_id": "m1"}

    def test_failed_registration_changes_nothing(self, services, admin, make_event, make_member):
        event = make_event(capacity=1)
        services.registrations.register(make_member("m1"), event.id)
        before = services.audit.list_records(admin)

        with pytest.raises(EventFullError):
            services.registrations.register(make_member("m2"), event.id)

        assert services.audit.list_records(admin) == before
        assert _live(services, admin, event) == 1

    def test_member_cannot_register_someone_else(self, services, make_event, member):
        event = make_event()
        with pytest.raises(ForbiddenError):
            services.registrations.register(member, event.id, member_id="m2")
        assert services.registrations._registrations.count_live("t1", event.id) == 0

    def test_admin_member_may_register_on_behalf(self, services, make_event):
        organizer = Actor.of("t1", "organizer", Role.ADMIN, Role.MEMBER)
        event = make_event()

        registration = services.registrations.register(organizer, event.id, member_id="m2")

        assert registration.member_id == "m2"


class TestCancelRegistration:
    def test_cancel_without_registration_is_not_found(self, services, make_event, member):
        event = make_event()
        with pytest.raises(RegistrationNotFoundError) as excinfo:
            services.registrations.cancel_registration(member, event.id)
        assert excinfo.value.code is ErrorCode.NOT_FOUND

    def test_cancel_on_unknown_event_is_not_found(self, services, member):
        with pytest.raises(EventNotFoundError):
            services.registrations.cancel_registration(
                member, "12345678-1234-5678-1234-567812345678"
            )

    def test_member_cannot_cancel_someone_else(self, services, make_event, make_member):
        event = make_event()
        services.registrations.register(make_member("m2"), event.id)

        with pytest.raises(ForbiddenError):
            services.registrations.cancel_registration(make_member("m1"), event.id, "m2")

        assert services.registrations._registrations.count_live("t1", event.id) == 1

    def test_cancel_is_audited(self, services, admin, make_event, member):
        event = make_event()
        services.registrations.register(member, event.id)
        services.registrations.cancel_registration(member, event.id)

        actions = [record.action for record in services.audit.list_records(admin, event.id)]
        assert actions[-2:] == [
            AuditAction.REGISTRATION_CREATED,
            AuditAction.REGISTRATION_CANCELED,
        ]

    def test_re_register_after_cancel(self, services, admin, make_event, member):
        event = make_event(capacity=1)
        services.registrations.register(member, event.id)
        services.registrations.cancel_registration(member, event.id)

        services.registrations.register(member, event.id)

        assert _live(services, admin, event) == 1


class TestCapacityInvariant:
    def test_random_sequences_never_exceed_capacity(
        self, services, admin, make_event, make_member
    ):
        rng = random.Random(7)
        event = make_event(capacity=3)
        registered: set[str] = set()

        for _ in range(200):
            member_id = f"m{rng.randrange(6)}"
            actor = make_member(member_id)
            if rng.random() < 0.6:
                try:
                    services.registrations.register(actor, event.id)
                    registered.add(member_id)
                except (EventFullError, DuplicateRegistrationError):
                    pass
            else:
                try:
                    services.registrations.cancel_registration(actor, event.id)
                    registered.discard(member_id)
                except RegistrationNotFoundError:
                    pass

            live = _live(services, admin, event)
            assert live <= 3
            assert live == len(registered)


class TestListUpcoming:
    def test_only_future_published_events_in_start_order(
        self, services, make_event, member, clock
    ):
        make_event(title="Later", starts_in=timedelta(days=3))
        make_event(title="Draft", starts_in=timedelta(days=1), publish=False)
        make_event(title="Sooner", starts_in=timedelta(days=1))
        make_event(title="Past", starts_in=timedelta(hours=1))
        clock.advance(timedelta(hours=2))

        page = services.registrations.list_upcoming(member)

        assert [item.event.title for item in page.items] == ["Sooner", "Later"]
        assert page.total_items == 2
        assert page.total_pages == 1

    def test_ties_keep_creation_order(self, services, make_event, member):
        for title in ["A", "B", "C"]:
            make_event(title=title, starts_in=timedelta(days=2))

        page = services.registrations.list_upcoming(member)

        assert [item.event.title for item in page.items] == ["A", "B", "C"]

    def test_pagination(self, services, make_event, member):
        for index in range(5):
            make_event(title=f"Event {index}", starts_in=timedelta(days=index + 1))

        page = services.registrations.list_upcoming(member, page=2, page_size=2)

        assert [item.event.title for item in page.items] == ["Event 2", "Event 3"]
        assert page.page == 2
        assert page.page_size == 2
        assert page.total_items == 5
        assert page.total_pages == 3

    @pytest.mark.parametrize(
        "page, page_size, expected",
        [(0, 0, (1, 1)), (-3, 500, (1, 100)), ("x", "y", (1, 20)), (None, None, (1, 20))],
    )
    def test_page_and_size_are_clamped(self, services, member, page, page_size, expected):
        result = services.registrations.list_upcoming(member, page=page, page_size=page_size)
        assert (result.page, result.page_size) == expected

    def test_empty_listing_has_one_page(self, services, member):
        page = services.registrations.list_upcoming(member)
        assert page.items == ()
        assert page.total_items == 0
        assert page.total_pages == 1

    def test_items_carry_live_counts(self, services, make_event, member):
        event = make_event()
        services.registrations.register(member, event.id)

        page = services.registrations.list_upcoming(member)

        assert page.items[0].registrations_count == 1

"""Tenant boundary tests: another tenant's event looks exactly like a missing one.

Run with: pytest tests/test_tenant_isolation.py -v
"""

import pytest

from events.domain import Actor, Role
from events.domain.errors import DomainError, ErrorCode

MISSING_ID = "12345678-1234-5678-1234-567812345678"

COMMANDS = {
    "publish": lambda s, admin, member, event_id: s.catalog.publish_event(admin, event_id),
    "capacity": lambda s, admin, member, event_id: s.catalog.update_capacity(admin, event_id, 50),
    "pricing": lambda s, admin, member, event_id: s.catalog.update_pricing(
        admin, event_id, 10, "USD"
    ),
    "get": lambda s, admin, member, event_id: s.catalog.get_event(admin, event_id),
    "register": lambda s, admin, member, event_id: s.registrations.register(member, event_id),
    "cancel": lambda s, admin, member, event_id: s.registrations.cancel_registration(
        member, event_id
    ),
}


def _failure(call) -> DomainError:
    with pytest.raises(DomainError) as excinfo:
        call()
    return excinfo.value


@pytest.mark.parametrize("command", sorted(COMMANDS))
def test_foreign_event_is_indistinguishable_from_missing(command, services, make_event):
    owned = make_event(title="Owned by t1", publish=False)
    outsider_admin = Actor.of("t2", "admin-2", Role.ADMIN)
    outsider_member = Actor.of("t2", "m9", Role.MEMBER)
    run = COMMANDS[command]

    foreign = _failure(lambda: run(services, outsider_admin, outsider_member, owned.id))
    missing = _failure(lambda: run(services, outsider_admin, outsider_member, MISSING_ID))

    assert foreign.code is ErrorCode.NOT_FOUND
    assert (foreign.code, foreign.message, foreign.details) == (
        missing.code,
        missing.message,
        missing.details,
    )


def test_scenario_foreign_admin_cannot_publish(services, make_event, other_admin, admin):
    owned = make_event(publish=False)

    failure = _failure(lambda: services.catalog.publish_event(other_admin, owned.id))

    assert failure.code is ErrorCode.NOT_FOUND
    assert not services.catalog.get_event(admin, owned.id).event.is_published


def test_listings_never_cross_tenants(services, make_event, other_admin):
    make_event(title="t1 event")
    make_event(title="t2 event", actor=other_admin)

    t2_member = Actor.of("t2", "m9", Role.MEMBER)
    titles = [item.event.title for item in services.registrations.list_upcoming(t2_member).items]

    assert titles == ["t2 event"]
    assert [s.event.title for s in services.catalog.list_events(other_admin)] == ["t2 event"]


def test_audit_records_stay_in_their_tenant(services, make_event, admin, other_admin):
    make_event(title="t1 event")

    assert services.audit.list_records(other_admin) == []
    assert len(services.audit.list_records(admin)) == 1

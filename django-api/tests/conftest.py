"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from events.domain import Actor, Role
from events.services.container import EventServices, build_memory_services, get_services

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def reset_services():
    get_services.cache_clear()
    yield
    get_services.cache_clear()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def services(clock: FrozenClock) -> EventServices:
    return build_memory_services(clock=clock)


@pytest.fixture
def admin() -> Actor:
    return Actor.of("t1", "admin-1", Role.ADMIN)


@pytest.fixture
def other_admin() -> Actor:
    return Actor.of("t2", "admin-2", Role.ADMIN)


@pytest.fixture
def member() -> Actor:
    return Actor.of("t1", "m1", Role.MEMBER)


@pytest.fixture
def make_member():
    def _make(member_id: str, tenant_id: str = "t1") -> Actor:
        return Actor.of(tenant_id, member_id, Role.MEMBER)

    return _make


@pytest.fixture
def make_event(services: EventServices, admin: Actor, clock: FrozenClock):
    """Create an event starting ``starts_in`` from now; publish it unless told not to."""

    def _make(
        title: str = "Board Meeting",
        starts_in: timedelta = timedelta(days=7),
        capacity: int | None = None,
        publish: bool = True,
        actor: Actor | None = None,
        **fields,
    ):
        owner = actor or admin
        start = clock() + starts_in
        event = services.catalog.create_event(
            owner,
            title=title,
            start_date=start,
            end_date=start + timedelta(hours=2),
            capacity=capacity,
            **fields,
        )
        if publish:
            event = services.catalog.publish_event(owner, event.id)
        return event

    return _make

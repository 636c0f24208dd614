"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import ClassVar, Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrationId:
    """Unique identifier for a Registration."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AuditRecordId:
    """Unique identifier for an AuditRecord."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    LIMIT: ClassVar[Decimal] = Decimal("10000000000")

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        if self.amount >= self.LIMIT:
            raise ValueError("Money amount is too large")

    @classmethod
    def parse(cls, value: object) -> Self:
        """Build from an int, float, Decimal or numeric string.

        Raises ValueError for booleans, non-numeric input, NaN/infinity and
        negative amounts.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
            raise ValueError("Money amount must be numeric")
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError("Money amount must be numeric") from exc
        if not amount.is_finite():
            raise ValueError("Money amount must be finite")
        return cls(amount=amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity.

    Bounded by ``MAX`` so it fits a positive integer column on every backend.
    """

    MAX: ClassVar[int] = 2_147_483_647

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
        if self.value > self.MAX:
            raise ValueError("Capacity is too large")

    def admits(self, live_count: int) -> bool:
        """True when one more registration fits."""
        return live_count < self.value

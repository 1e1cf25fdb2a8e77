"""
Room Aggregate - Aggregate Root for room reservations

[DDD Design Principles]
- Room is the Aggregate Root
- Bookings are owned exclusively by their Room and only change through it
- Cross-room lookups (e.g. bookings by guest email) go through the booking repository

[Business Invariants]
- Two active bookings of one room never overlap (half-open date ranges)
- A room cannot be deactivated, put into maintenance, or deleted while it
  holds future commitments
- Revenue and occupancy only count Completed bookings
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.clock.clock import IClock
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.room_status import RoomStatus
from src.service.booking.domain.value_object.room_image import RoomImage


# Provisional figure: stays that are committed but not yet closed out
PROJECTED_REVENUE_STATUSES = frozenset(
    {
        BookingStatus.CONFIRMED,
        BookingStatus.CHECKED_IN,
        BookingStatus.CHECKED_OUT,
        BookingStatus.COMPLETED,
    }
)


def _validate_details(*, name: str, price: Decimal, capacity: int) -> None:
    if not name or not name.strip():
        raise DomainError('Room name is required.')
    if price is None or Decimal(price) <= 0:
        raise DomainError('Room price must be greater than zero.')
    if capacity is None or capacity <= 0:
        raise DomainError('Room capacity must be greater than zero.')


def _in_window(moment: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


@attrs.define
class Room:
    id: UUID
    name: str
    description: str
    price: Decimal
    capacity: int
    status: RoomStatus = RoomStatus.AVAILABLE
    images: Tuple[RoomImage, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    _bookings: Dict[UUID, Booking] = attrs.field(factory=dict, init=False, repr=False)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Iterable[RoomImage] = (),
        clock: Optional[IClock] = None,
        id: Optional[UUID] = None,
    ) -> 'Room':
        _validate_details(name=name, price=price, capacity=capacity)
        now = clock.now() if clock else None
        return cls(
            id=id or uuid7(),
            name=name.strip(),
            description=description or '',
            price=Decimal(price),
            capacity=capacity,
            status=RoomStatus.AVAILABLE,
            images=tuple(images),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def rehydrate(cls, *, bookings: Iterable[Booking] = (), **persisted_fields) -> 'Room':
        """Rebuild a room and its owned bookings from storage without validation."""
        room = cls(**persisted_fields)
        for booking in bookings:
            room._bookings[booking.id] = booking
        return room

    # ------------------------------------------------------------------
    # Details and status
    # ------------------------------------------------------------------

    @Logger.io
    def update_details(
        self,
        *,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Optional[Iterable[RoomImage]] = None,
        clock: Optional[IClock] = None,
    ) -> None:
        _validate_details(name=name, price=price, capacity=capacity)
        self.name = name.strip()
        self.description = description or ''
        self.price = Decimal(price)
        self.capacity = capacity
        if images is not None:
            self.images = tuple(images)
        if clock:
            self.updated_at = clock.now()

    @Logger.io
    def activate(self, *, clock: IClock) -> None:
        if self.status == RoomStatus.AVAILABLE:
            raise DomainError('Room is already available.')
        self.status = RoomStatus.AVAILABLE
        self.updated_at = clock.now()

    @Logger.io
    def deactivate(self, *, clock: IClock) -> None:
        if self.status == RoomStatus.INACTIVE:
            raise DomainError('Room is already inactive.')
        if self.has_future_bookings(clock.now()):
            raise DomainError('Cannot deactivate room with future bookings.')
        self.status = RoomStatus.INACTIVE
        self.updated_at = clock.now()

    @Logger.io
    def set_maintenance(self, *, clock: IClock) -> None:
        if self.status == RoomStatus.MAINTENANCE:
            raise DomainError('Room is already under maintenance.')
        if self.has_future_bookings(clock.now()):
            raise DomainError('Cannot set room to maintenance with future bookings.')
        self.status = RoomStatus.MAINTENANCE
        self.updated_at = clock.now()

    # ------------------------------------------------------------------
    # Owned bookings
    # ------------------------------------------------------------------

    @property
    def bookings(self) -> Tuple[Booking, ...]:
        return tuple(sorted(self._bookings.values(), key=lambda b: b.check_in))

    def get_booking(self, booking_id: UUID) -> Optional[Booking]:
        return self._bookings.get(booking_id)

    def is_available(
        self,
        check_in: datetime,
        check_out: datetime,
        *,
        exclude_booking_id: Optional[UUID] = None,
    ) -> bool:
        """
        Whether the stay [check_in, check_out) fits this room

        `exclude_booking_id` ignores one owned booking, used when that booking
        itself is being moved.

        Raises:
            DomainError: When check_in is not before check_out
        """
        if check_in >= check_out:
            raise DomainError('Check-in date must be before check-out date.')
        if self.status != RoomStatus.AVAILABLE:
            return False
        return not any(
            booking.overlaps(check_in, check_out)
            for booking in self._bookings.values()
            if booking.is_active() and booking.id != exclude_booking_id
        )

    @Logger.io
    def add_booking(self, booking: Booking) -> None:
        if booking is None:
            raise DomainError('Booking is required.')
        if booking.room_id != self.id:
            raise DomainError('Booking does not belong to this room.')
        if booking.id in self._bookings:
            raise DomainError('Booking already exists for this room.')
        if not self.is_available(booking.check_in, booking.check_out):
            raise DomainError('Room is not available on selected dates.')
        self._bookings[booking.id] = booking

    @Logger.io
    def replace_booking(self, booking: Booking) -> None:
        """Store a transitioned copy of a booking this room already owns."""
        if booking.id not in self._bookings or booking.room_id != self.id:
            raise DomainError('Booking does not belong to this room.')
        self._bookings[booking.id] = booking

    @Logger.io
    def reschedule_booking(
        self, *, booking_id: UUID, check_in: datetime, check_out: datetime, clock: IClock
    ) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise DomainError('Booking does not belong to this room.')
        if not self.is_available(check_in, check_out, exclude_booking_id=booking_id):
            raise DomainError('Room is not available on selected dates.')
        updated = booking.update_booking_dates(
            check_in=check_in, check_out=check_out, clock=clock
        )
        self._bookings[booking_id] = updated
        return updated

    def has_future_bookings(self, now: datetime) -> bool:
        return any(booking.is_future_commitment(now) for booking in self._bookings.values())

    def ensure_can_be_deleted(self, now: datetime) -> None:
        # Wider than has_future_bookings: any non-cancelled future stay blocks deletion
        if any(
            booking.check_in > now and booking.is_active()
            for booking in self._bookings.values()
        ):
            raise DomainError('Cannot delete room with future bookings.')

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _sum_amounts(
        self,
        statuses: frozenset,
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> Decimal:
        return sum(
            (
                booking.total_amount
                for booking in self._bookings.values()
                if booking.status in statuses and _in_window(booking.check_in, start, end)
            ),
            Decimal('0'),
        )

    def calculate_revenue(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        """
        Sum of Completed bookings whose check-in lies in [start, end]

        Each bound is optional; a missing bound leaves that side open.
        """
        return self._sum_amounts(frozenset({BookingStatus.COMPLETED}), start, end)

    def calculate_projected_revenue(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Decimal:
        return self._sum_amounts(PROJECTED_REVENUE_STATUSES, start, end)

    def get_occupancy_rate(self, start: datetime, end: datetime) -> int:
        """
        Percentage of [start, end) covered by Completed stays, truncated to int

        Raises:
            DomainError: When start is not before end
        """
        if start >= end:
            raise DomainError('Start date must be before end date.')

        occupied = timedelta(0)
        for booking in self._bookings.values():
            if booking.status != BookingStatus.COMPLETED:
                continue
            overlap_start = max(booking.check_in, start)
            overlap_end = min(booking.check_out, end)
            if overlap_start < overlap_end:
                occupied += overlap_end - overlap_start

        rate = (occupied * 100) // (end - start)
        return max(0, min(100, rate))

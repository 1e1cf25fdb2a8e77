from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid4, uuid7

from src.platform.clock.clock import IClock
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_lifecycle import BookingTrigger, next_status
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.contact_info import ContactInfo


_SECONDS_PER_DAY = Decimal(86400)
_CENTS = Decimal('0.01')

# Statuses that still hold the room for a future stay
FUTURE_COMMITMENT_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN}
)


def _validate_stay(*, check_in: datetime, check_out: datetime, now: datetime) -> None:
    if check_in >= check_out:
        raise DomainError('Check-in date must be before check-out date.')
    if check_in < now:
        raise DomainError('Check-in date cannot be in the past.')


@attrs.define(frozen=True)
class Booking:
    """
    A single room reservation.

    Instances are immutable; every lifecycle method returns an evolved copy
    with the new status, so callers must store the returned value.
    """

    id: UUID
    room_id: UUID
    check_in: datetime
    check_out: datetime
    guests: int
    contact_info: ContactInfo
    email_address: str
    guest_name: str
    total_amount: Decimal
    status: BookingStatus
    booking_token: UUID
    special_requests: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        room_id: UUID,
        check_in: datetime,
        check_out: datetime,
        guests: int,
        total_amount: Decimal,
        contact_info: ContactInfo,
        email_address: str,
        guest_name: str,
        clock: IClock,
        special_requests: str = '',
        require_email_verification: bool = False,
        id: Optional[UUID] = None,
    ) -> 'Booking':
        now = clock.now()
        _validate_stay(check_in=check_in, check_out=check_out, now=now)
        if guests <= 0:
            raise DomainError('Number of guests must be greater than zero.')
        if total_amount <= 0:
            raise DomainError('Total amount must be greater than zero.')
        if not guest_name or not guest_name.strip():
            raise DomainError('Guest name is required.')
        if not email_address or not email_address.strip():
            raise DomainError('Email address is required.')

        status = (
            BookingStatus.EMAIL_VERIFICATION_PENDING
            if require_email_verification
            else BookingStatus.PENDING
        )
        return cls(
            id=id or uuid7(),
            room_id=room_id,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            contact_info=contact_info,
            email_address=email_address.strip(),
            guest_name=guest_name.strip(),
            total_amount=total_amount,
            status=status,
            booking_token=uuid4(),
            special_requests=special_requests or '',
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def rehydrate(cls, **persisted_fields) -> 'Booking':
        """Rebuild a booking from storage without re-running creation rules."""
        return cls(**persisted_fields)

    @staticmethod
    def calculate_total_amount(
        *, price: Decimal, check_in: datetime, check_out: datetime
    ) -> Decimal:
        if check_in >= check_out:
            raise DomainError('Check-in date must be before check-out date.')
        nights = Decimal((check_out - check_in).total_seconds()) / _SECONDS_PER_DAY
        return (Decimal(price) * nights).quantize(_CENTS)

    @property
    def nights(self) -> Decimal:
        return Decimal((self.check_out - self.check_in).total_seconds()) / _SECONDS_PER_DAY

    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED

    def overlaps(self, check_in: datetime, check_out: datetime) -> bool:
        # Half-open ranges: a stay ending on the day another begins does not collide
        return check_in < self.check_out and self.check_in < check_out

    def is_future_commitment(self, now: datetime) -> bool:
        return self.check_in > now and self.status in FUTURE_COMMITMENT_STATUSES

    def _transition(self, trigger: BookingTrigger, *, clock: IClock, **changes) -> 'Booking':
        target = next_status(self.status, trigger)
        return attrs.evolve(self, status=target, updated_at=clock.now(), **changes)

    @Logger.io
    def confirm(self, *, clock: IClock) -> 'Booking':
        return self._transition(BookingTrigger.CONFIRM, clock=clock)

    @Logger.io
    def confirm_after_verification(self, *, clock: IClock) -> 'Booking':
        return self._transition(BookingTrigger.CONFIRM_AFTER_VERIFICATION, clock=clock)

    @Logger.io
    def cancel(self, *, clock: IClock) -> 'Booking':
        return self._transition(BookingTrigger.CANCEL, clock=clock)

    @Logger.io
    def check_in_guest(self, *, clock: IClock) -> 'Booking':
        return self._transition(BookingTrigger.CHECK_IN, clock=clock)

    @Logger.io
    def check_out_guest(self, *, clock: IClock) -> 'Booking':
        return self._transition(BookingTrigger.CHECK_OUT, clock=clock)

    @Logger.io
    def complete(self, *, clock: IClock) -> 'Booking':
        """
        Close out a confirmed stay

        Raises:
            DomainError: When not Confirmed, or the check-out date has not passed yet
        """
        next_status(self.status, BookingTrigger.COMPLETE)
        if self.check_out > clock.now():
            raise DomainError('Booking cannot be completed before the check-out date.')
        return self._transition(BookingTrigger.COMPLETE, clock=clock)

    @Logger.io
    def update_booking_dates(
        self, *, check_in: datetime, check_out: datetime, clock: IClock
    ) -> 'Booking':
        """
        Move the stay while it is still unconfirmed

        The amount stays as charged at creation.
        """
        next_status(self.status, BookingTrigger.UPDATE_DATES)
        _validate_stay(check_in=check_in, check_out=check_out, now=clock.now())
        return self._transition(
            BookingTrigger.UPDATE_DATES, clock=clock, check_in=check_in, check_out=check_out
        )

"""
In-memory adapters for booking unit tests

InMemoryStore plays the database: repositories read and write it, and
InMemoryUnitOfWork snapshots it so that leaving a unit of work without
commit restores the last committed state, like a real transaction.
"""

import re
from typing import List, Optional
from uuid import UUID

import attrs

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.app.interface.i_otp_hasher import IOtpHasher
from src.service.booking.app.interface.i_otp_repo import IOtpRepo
from src.service.booking.app.interface.i_room_repo import IRoomRepo
from src.service.booking.domain.aggregate.room_aggregate import Room
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.otp_verification_entity import (
    OtpVerification,
    normalize_email,
)
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender


_OTP_LINE = re.compile(r'^\s*(\d{4,10})\s*$', re.MULTILINE)


class InMemoryStore:
    def __init__(self) -> None:
        self.rooms: dict[UUID, dict] = {}
        self.bookings: dict[UUID, Booking] = {}
        self.otps: list[OtpVerification] = []
        self.commit_count = 0
        self.rollback_count = 0

    def snapshot(self) -> tuple:
        return dict(self.rooms), dict(self.bookings), list(self.otps)

    def restore(self, snapshot: tuple) -> None:
        rooms, bookings, otps = snapshot
        self.rooms, self.bookings, self.otps = dict(rooms), dict(bookings), list(otps)

    # Test helpers that bypass the unit of work
    def seed_room(self, room: Room) -> Room:
        self.rooms[room.id] = _room_row(room)
        for booking in room.bookings:
            self.bookings[booking.id] = booking
        return room

    def seed_booking(self, booking: Booking) -> Booking:
        self.bookings[booking.id] = booking
        return booking

    def load_room(self, room_id: UUID) -> Optional[Room]:
        row = self.rooms.get(room_id)
        if row is None:
            return None
        owned = [b for b in self.bookings.values() if b.room_id == room_id]
        return Room.rehydrate(bookings=owned, **row)

    def otps_for(self, booking_id: UUID) -> List[OtpVerification]:
        return [otp for otp in self.otps if otp.booking_id == booking_id]


def _room_row(room: Room) -> dict:
    row = attrs.asdict(room, recurse=False)
    row.pop('_bookings', None)
    return row


class InMemoryRoomRepo(IRoomRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.locked_room_ids: list[UUID] = []

    async def get_by_id(self, *, room_id: UUID, for_update: bool = False) -> Optional[Room]:
        if for_update:
            self.locked_room_ids.append(room_id)
        return self.store.load_room(room_id)

    async def list_all(self) -> List[Room]:
        rooms = [self.store.load_room(room_id) for room_id in self.store.rooms]
        return sorted((room for room in rooms if room), key=lambda room: room.name)

    async def add(self, *, room: Room) -> None:
        self.store.rooms[room.id] = _room_row(room)

    async def update(self, *, room: Room) -> None:
        self.store.rooms[room.id] = _room_row(room)

    async def delete(self, *, room_id: UUID) -> None:
        self.store.rooms.pop(room_id, None)
        for booking_id in [b.id for b in self.store.bookings.values() if b.room_id == room_id]:
            del self.store.bookings[booking_id]


class InMemoryBookingRepo(IBookingRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.locked_booking_ids: list[UUID] = []

    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        if for_update:
            self.locked_booking_ids.append(booking_id)
        return self.store.bookings.get(booking_id)

    async def get_by_token(self, *, booking_token: UUID) -> Optional[Booking]:
        return next(
            (b for b in self.store.bookings.values() if b.booking_token == booking_token), None
        )

    async def list_by_email(self, *, email_address: str) -> List[Booking]:
        wanted = normalize_email(email_address)
        return [
            b for b in self.store.bookings.values() if normalize_email(b.email_address) == wanted
        ]

    async def list_all(self) -> List[Booking]:
        return list(self.store.bookings.values())

    async def add(self, *, booking: Booking) -> None:
        self.store.bookings[booking.id] = booking

    async def update(self, *, booking: Booking) -> None:
        self.store.bookings[booking.id] = booking

    async def delete(self, *, booking_id: UUID) -> None:
        self.store.bookings.pop(booking_id, None)


class InMemoryOtpRepo(IOtpRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def get(self, *, booking_id: UUID, email_address: str) -> Optional[OtpVerification]:
        email = normalize_email(email_address)
        matches = [
            otp
            for otp in self.store.otps
            if otp.booking_id == booking_id and otp.email_address == email
        ]
        return matches[-1] if matches else None

    async def add(self, *, otp: OtpVerification) -> None:
        self.store.otps.append(otp)

    def _replace(self, otp: OtpVerification) -> None:
        self.store.otps = [otp if o.id == otp.id else o for o in self.store.otps]

    async def update(self, *, otp: OtpVerification) -> None:
        current = next(o for o in self.store.otps if o.id == otp.id)
        self._replace(attrs.evolve(otp, attempt_count=current.attempt_count))

    async def delete(self, *, otp_id: UUID) -> None:
        self.store.otps = [o for o in self.store.otps if o.id != otp_id]

    async def increment_attempts(self, *, otp_id: UUID) -> int:
        updated = next(o for o in self.store.otps if o.id == otp_id).with_attempt()
        self._replace(updated)
        return updated.attempt_count

    async def delete_expired(self, *, now) -> int:
        # Insertion order is issue order, so the last write per key wins
        latest = {(o.booking_id, o.email_address): o.id for o in self.store.otps}
        awaiting = {
            b.id
            for b in self.store.bookings.values()
            if b.status == BookingStatus.EMAIL_VERIFICATION_PENDING
        }
        before = len(self.store.otps)
        self.store.otps = [
            o
            for o in self.store.otps
            if not o.expires_at < now
            or (latest[(o.booking_id, o.email_address)] == o.id and o.booking_id in awaiting)
        ]
        return before - len(self.store.otps)


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.rooms = InMemoryRoomRepo(store)
        self.bookings = InMemoryBookingRepo(store)
        self.otps = InMemoryOtpRepo(store)
        self._committed = store.snapshot()

    async def __aenter__(self):
        self._committed = self.store.snapshot()
        return await super().__aenter__()

    async def _commit(self) -> None:
        self._committed = self.store.snapshot()
        self.store.commit_count += 1

    async def rollback(self) -> None:
        self.store.restore(self._committed)
        self.store.rollback_count += 1


class PlainOtpHasher(IOtpHasher):
    """Reversible stand-in for bcrypt so unit tests stay fast"""

    def hash_code(self, *, code: str) -> str:
        return f'hashed:{code}'

    def verify_code(self, *, code: str, code_hash: str) -> bool:
        return code_hash == f'hashed:{code}'


def last_otp_code(email_sender: MockEmailSender) -> str:
    """Plaintext code from the most recent OTP email"""
    otp_emails = [e for e in email_sender.sent_emails if e['subject'].startswith('Verify')]
    match = _OTP_LINE.search(otp_emails[-1]['body'])
    assert match, 'no OTP code found in email body'
    return match.group(1)

"""
Unit of Work Pattern - single owner of the database session and its repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories share the UoW session
- Use cases coordinate repositories through one UoW per operation
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.booking.app.interface.i_booking_repo import IBookingRepo
    from src.service.booking.app.interface.i_otp_repo import IOtpRepo
    from src.service.booking.app.interface.i_room_repo import IRoomRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Booking Service

    Leaving the context without calling `commit()` rolls back every write.

    Usage:
        async with uow:
            room = await uow.rooms.get_by_id(room_id=room_id, for_update=True)
            await uow.bookings.add(booking=booking)
            await uow.commit()
    """

    rooms: IRoomRepo
    bookings: IBookingRepo
    otps: IOtpRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is opened on enter and closed on exit, so one instance
    serves exactly one transaction at a time.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self):
        from src.service.booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
        from src.service.booking.driven_adapter.repo.otp_repo_impl import OtpRepoImpl
        from src.service.booking.driven_adapter.repo.room_repo_impl import RoomRepoImpl

        self.session = self.session_factory()
        self.rooms = RoomRepoImpl(session=self.session)
        self.bookings = BookingRepoImpl(session=self.session)
        self.otps = OtpRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self):
        assert self.session is not None, 'commit() called outside of the unit of work context'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()

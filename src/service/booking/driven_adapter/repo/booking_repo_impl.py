from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.value_object.contact_info import ContactInfo
from src.service.booking.driven_adapter.model.booking_model import BookingModel


def booking_to_entity(db_booking: BookingModel) -> Booking:
    return Booking.rehydrate(
        id=db_booking.id,
        room_id=db_booking.room_id,
        check_in=db_booking.check_in,
        check_out=db_booking.check_out,
        guests=db_booking.guests,
        contact_info=ContactInfo(phone=db_booking.phone, address=db_booking.address),
        email_address=db_booking.email_address,
        guest_name=db_booking.guest_name,
        total_amount=db_booking.total_amount,
        status=BookingStatus(db_booking.status),
        booking_token=db_booking.booking_token,
        special_requests=db_booking.special_requests or '',
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def _mutable_columns(booking: Booking) -> dict:
    return {
        'check_in': booking.check_in,
        'check_out': booking.check_out,
        'guests': booking.guests,
        'phone': booking.contact_info.phone,
        'address': booking.contact_info.address,
        'email_address': booking.email_address,
        'guest_name': booking.guest_name,
        'total_amount': booking.total_amount,
        'status': booking.status.value,
        'special_requests': booking.special_requests,
        'updated_at': booking.updated_at,
    }


class BookingRepoImpl(IBookingRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        stmt = select(BookingModel).where(BookingModel.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update()
        db_booking = (await self.session.execute(stmt)).scalar_one_or_none()
        return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def get_by_token(self, *, booking_token: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.booking_token == booking_token)
        )
        db_booking = result.scalar_one_or_none()
        return booking_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def list_by_email(self, *, email_address: str) -> List[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(func.lower(BookingModel.email_address) == email_address.strip().lower())
            .order_by(BookingModel.check_in.desc())
        )
        return [booking_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Booking]:
        result = await self.session.execute(
            select(BookingModel).order_by(BookingModel.created_at.desc())
        )
        return [booking_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def add(self, *, booking: Booking) -> None:
        self.session.add(
            BookingModel(
                id=booking.id,
                room_id=booking.room_id,
                booking_token=booking.booking_token,
                created_at=booking.created_at,
                **_mutable_columns(booking),
            )
        )
        await self.session.flush()

    @Logger.io
    async def update(self, *, booking: Booking) -> None:
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(**_mutable_columns(booking))
        )

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> None:
        await self.session.execute(delete(BookingModel).where(BookingModel.id == booking_id))

"""
Booking orchestrator - single entry point for every booking and room operation

Use cases raise; the orchestrator never does. Each call returns an
`OperationResult`:
- CustomBaseError subclasses keep their own message and status code
  (rule violations and rate limits 400, authorization 403, missing 404)
- anything unexpected becomes 500 "Failed to <operation>: <detail>"

Transactions and rollback live in the use cases; by the time a failure
reaches this layer the unit of work has already rolled back.
"""

from datetime import datetime
from decimal import Decimal
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar
from uuid import UUID

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.app.command.cleanup_expired_otps_use_case import (
    CleanupExpiredOtpsUseCase,
)
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.command.create_room_use_case import CreateRoomUseCase
from src.service.booking.app.command.delete_room_use_case import DeleteRoomUseCase
from src.service.booking.app.command.resend_otp_use_case import ResendOtpUseCase
from src.service.booking.app.command.update_booking_dates_use_case import (
    UpdateBookingDatesUseCase,
)
from src.service.booking.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.booking.app.command.update_room_status_use_case import UpdateRoomStatusUseCase
from src.service.booking.app.command.update_room_use_case import UpdateRoomUseCase
from src.service.booking.app.command.verify_booking_otp_use_case import VerifyBookingOtpUseCase
from src.service.booking.app.dto.booking_dto import BookingCreatedDto, BookingDto
from src.service.booking.app.dto.operation_result import OperationResult
from src.service.booking.app.dto.room_dto import RoomDto, RoomOccupancyDto, RoomRevenueDto
from src.service.booking.app.query.check_room_availability_use_case import (
    CheckRoomAvailabilityUseCase,
)
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.app.query.get_room_occupancy_rate_use_case import (
    GetRoomOccupancyRateUseCase,
)
from src.service.booking.app.query.get_room_revenue_use_case import GetRoomRevenueUseCase
from src.service.booking.app.query.get_room_use_case import GetRoomUseCase
from src.service.booking.app.query.list_bookings_by_email_use_case import (
    ListBookingsByEmailUseCase,
)
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.app.query.list_rooms_use_case import ListRoomsUseCase
from src.service.booking.app.query.view_booking_by_token_use_case import (
    ViewBookingByTokenUseCase,
)
from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.room_status import RoomStatus


T = TypeVar('T')


class BookingOrchestrator:
    def __init__(
        self,
        *,
        create_booking: CreateBookingUseCase,
        update_booking_dates: UpdateBookingDatesUseCase,
        update_booking_status: UpdateBookingStatusUseCase,
        cancel_booking: CancelBookingUseCase,
        verify_booking_otp: VerifyBookingOtpUseCase,
        resend_otp: ResendOtpUseCase,
        get_booking: GetBookingUseCase,
        view_booking_by_token: ViewBookingByTokenUseCase,
        list_bookings_by_email: ListBookingsByEmailUseCase,
        list_bookings: ListBookingsUseCase,
        create_room: CreateRoomUseCase,
        update_room: UpdateRoomUseCase,
        update_room_status: UpdateRoomStatusUseCase,
        delete_room: DeleteRoomUseCase,
        get_room: GetRoomUseCase,
        list_rooms: ListRoomsUseCase,
        check_room_availability: CheckRoomAvailabilityUseCase,
        get_room_revenue: GetRoomRevenueUseCase,
        get_room_occupancy_rate: GetRoomOccupancyRateUseCase,
        cleanup_expired_otps: CleanupExpiredOtpsUseCase,
    ) -> None:
        self._create_booking = create_booking
        self._update_booking_dates = update_booking_dates
        self._update_booking_status = update_booking_status
        self._cancel_booking = cancel_booking
        self._verify_booking_otp = verify_booking_otp
        self._resend_otp = resend_otp
        self._get_booking = get_booking
        self._view_booking_by_token = view_booking_by_token
        self._list_bookings_by_email = list_bookings_by_email
        self._list_bookings = list_bookings
        self._create_room = create_room
        self._update_room = update_room
        self._update_room_status = update_room_status
        self._delete_room = delete_room
        self._get_room = get_room
        self._list_rooms = list_rooms
        self._check_room_availability = check_room_availability
        self._get_room_revenue = get_room_revenue
        self._get_room_occupancy_rate = get_room_occupancy_rate
        self._cleanup_expired_otps = cleanup_expired_otps

    @staticmethod
    async def _run(
        operation: str,
        call: Callable[[], Awaitable[T]],
        *,
        message: str,
        status_code: int = 200,
    ) -> OperationResult[T]:
        try:
            data = await call()
        except CustomBaseError as e:
            return OperationResult.fail(e.message, status_code=e.status_code)
        except Exception as e:
            Logger.base.error(f'💥 [ORCHESTRATOR] Failed to {operation}: {type(e).__name__}: {e}')
            return OperationResult.fail(f'Failed to {operation}: {e}', status_code=500)
        return OperationResult.ok(data, message=message, status_code=status_code)

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def create_booking(
        self,
        *,
        room_id: UUID,
        check_in: datetime,
        check_out: datetime,
        guests: int,
        guest_name: str,
        email_address: str,
        phone: str,
        address: str,
        special_requests: str = '',
    ) -> OperationResult[BookingCreatedDto]:
        message = (
            'OTP code has been sent to your email address.'
            if self._create_booking.require_email_verification
            else 'Booking created successfully.'
        )
        return await self._run(
            'create booking',
            lambda: self._create_booking.execute(
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
                guests=guests,
                guest_name=guest_name,
                email_address=email_address,
                phone=phone,
                address=address,
                special_requests=special_requests,
            ),
            message=message,
            status_code=201,
        )

    async def update_booking_dates(
        self, *, booking_id: UUID, check_in: datetime, check_out: datetime
    ) -> OperationResult[BookingDto]:
        return await self._run(
            'update booking dates',
            lambda: self._update_booking_dates.execute(
                booking_id=booking_id, check_in=check_in, check_out=check_out
            ),
            message='Booking dates updated successfully.',
        )

    async def update_booking_status(
        self, *, booking_id: UUID, new_status: BookingStatus
    ) -> OperationResult[BookingDto]:
        return await self._run(
            'update booking status',
            lambda: self._update_booking_status.execute(
                booking_id=booking_id, new_status=new_status
            ),
            message='Booking status updated successfully.',
        )

    async def cancel_booking(
        self, *, booking_id: UUID, email_address: Optional[str] = None
    ) -> OperationResult[BookingDto]:
        return await self._run(
            'cancel booking',
            lambda: self._cancel_booking.execute(
                booking_id=booking_id, email_address=email_address
            ),
            message='Booking cancelled successfully.',
        )

    async def verify_otp(
        self, *, booking_id: UUID, email_address: str, otp_code: str
    ) -> OperationResult[BookingDto]:
        return await self._run(
            'verify booking',
            lambda: self._verify_booking_otp.execute(
                booking_id=booking_id, email_address=email_address, otp_code=otp_code
            ),
            message='Booking verified and confirmed successfully.',
        )

    async def resend_otp(self, *, booking_id: UUID, email_address: str) -> OperationResult[None]:
        return await self._run(
            'resend OTP',
            lambda: self._resend_otp.execute(booking_id=booking_id, email_address=email_address),
            message='OTP code sent successfully.',
        )

    async def get_booking(self, *, booking_id: UUID) -> OperationResult[BookingDto]:
        return await self._run(
            'retrieve booking',
            lambda: self._get_booking.execute(booking_id=booking_id),
            message='Booking retrieved successfully.',
        )

    async def view_booking_by_token(self, *, booking_token: UUID) -> OperationResult[BookingDto]:
        return await self._run(
            'retrieve booking',
            lambda: self._view_booking_by_token.execute(booking_token=booking_token),
            message='Booking retrieved successfully.',
        )

    async def list_bookings_by_email(
        self, *, email_address: str
    ) -> OperationResult[List[BookingDto]]:
        return await self._run(
            'retrieve user bookings',
            lambda: self._list_bookings_by_email.execute(email_address=email_address),
            message='User bookings retrieved successfully.',
        )

    async def list_bookings(self) -> OperationResult[List[BookingDto]]:
        return await self._run(
            'retrieve all bookings',
            self._list_bookings.execute,
            message='All bookings retrieved successfully.',
        )

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    async def create_room(
        self,
        *,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Iterable[str] = (),
    ) -> OperationResult[RoomDto]:
        return await self._run(
            'create room',
            lambda: self._create_room.execute(
                name=name,
                description=description,
                price=price,
                capacity=capacity,
                images=images,
            ),
            message='Room created successfully.',
            status_code=201,
        )

    async def update_room(
        self,
        *,
        room_id: UUID,
        name: str,
        description: str,
        price: Decimal,
        capacity: int,
        images: Optional[Iterable[str]] = None,
    ) -> OperationResult[RoomDto]:
        return await self._run(
            'update room',
            lambda: self._update_room.execute(
                room_id=room_id,
                name=name,
                description=description,
                price=price,
                capacity=capacity,
                images=images,
            ),
            message='Room updated successfully.',
        )

    async def update_room_status(
        self, *, room_id: UUID, status: RoomStatus
    ) -> OperationResult[RoomDto]:
        return await self._run(
            'update room status',
            lambda: self._update_room_status.execute(room_id=room_id, status=status),
            message='Room status updated successfully.',
        )

    async def delete_room(self, *, room_id: UUID) -> OperationResult[None]:
        return await self._run(
            'delete room',
            lambda: self._delete_room.execute(room_id=room_id),
            message='Room deleted successfully.',
        )

    async def get_room(self, *, room_id: UUID) -> OperationResult[RoomDto]:
        return await self._run(
            'retrieve room',
            lambda: self._get_room.execute(room_id=room_id),
            message='Room retrieved successfully.',
        )

    async def list_rooms(self) -> OperationResult[List[RoomDto]]:
        return await self._run(
            'retrieve rooms',
            self._list_rooms.execute,
            message='Rooms retrieved successfully.',
        )

    async def check_room_availability(
        self, *, room_id: UUID, check_in: datetime, check_out: datetime
    ) -> OperationResult[bool]:
        return await self._run(
            'check room availability',
            lambda: self._check_room_availability.execute(
                room_id=room_id, check_in=check_in, check_out=check_out
            ),
            message='Room availability checked successfully.',
        )

    async def get_room_revenue(
        self,
        *,
        room_id: UUID,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> OperationResult[RoomRevenueDto]:
        return await self._run(
            'retrieve room revenue',
            lambda: self._get_room_revenue.execute(room_id=room_id, start=start, end=end),
            message='Room revenue retrieved successfully.',
        )

    async def get_room_occupancy_rate(
        self, *, room_id: UUID, start: datetime, end: datetime
    ) -> OperationResult[RoomOccupancyDto]:
        return await self._run(
            'retrieve room occupancy rate',
            lambda: self._get_room_occupancy_rate.execute(room_id=room_id, start=start, end=end),
            message='Room occupancy rate retrieved successfully.',
        )

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    async def cleanup_expired_otps(self) -> OperationResult[int]:
        return await self._run(
            'clean up expired OTPs',
            self._cleanup_expired_otps.execute,
            message='Expired OTP records removed.',
        )

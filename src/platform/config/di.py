"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.clock.clock import SystemClock
from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.booking.app.booking_orchestrator import BookingOrchestrator
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
from src.service.booking.app.service.otp_verification_service import OtpVerificationService
from src.service.booking.driven_adapter.email.mock_email_sender import MockEmailSender
from src.service.booking.driven_adapter.security.bcrypt_otp_hasher import BcryptOtpHasher


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Time source
    clock = providers.Singleton(SystemClock)

    # Database (engine is created lazily on first session)
    database = providers.Singleton(
        Database,
        url=config_service.provided.DATABASE_URL_ASYNC,
        echo=config_service.provided.DB_ECHO,
        pool_size=config_service.provided.DB_POOL_SIZE,
        max_overflow=config_service.provided.DB_POOL_MAX_OVERFLOW,
        pool_timeout=config_service.provided.DB_POOL_TIMEOUT,
        pool_recycle=config_service.provided.DB_POOL_RECYCLE,
        pool_pre_ping=config_service.provided.DB_POOL_PRE_PING,
    )

    # One unit of work per operation; use cases receive the factory itself
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
    )

    # Infrastructure services
    otp_hasher = providers.Singleton(BcryptOtpHasher, rounds=config_service.provided.OTP_BCRYPT_ROUNDS)
    email_sender = providers.Singleton(MockEmailSender, debug=config_service.provided.DEBUG)

    otp_service = providers.Singleton(
        OtpVerificationService,
        hasher=otp_hasher,
        clock=clock,
        otp_length=config_service.provided.OTP_LENGTH,
        expiration_minutes=config_service.provided.OTP_EXPIRATION_MINUTES,
        max_attempts=config_service.provided.OTP_MAX_ATTEMPTS,
        max_resends=config_service.provided.OTP_MAX_RESENDS,
    )

    # Booking use cases (stateless, can be Singleton)
    create_booking_use_case = providers.Singleton(
        CreateBookingUseCase,
        uow_factory=unit_of_work.provider,
        otp_service=otp_service,
        email_sender=email_sender,
        clock=clock,
        require_email_verification=config_service.provided.BOOKING_EMAIL_VERIFICATION_ENABLED,
    )
    update_booking_dates_use_case = providers.Singleton(
        UpdateBookingDatesUseCase,
        uow_factory=unit_of_work.provider,
        email_sender=email_sender,
        clock=clock,
    )
    update_booking_status_use_case = providers.Singleton(
        UpdateBookingStatusUseCase, uow_factory=unit_of_work.provider, clock=clock
    )
    cancel_booking_use_case = providers.Singleton(
        CancelBookingUseCase,
        uow_factory=unit_of_work.provider,
        email_sender=email_sender,
        clock=clock,
    )
    verify_booking_otp_use_case = providers.Singleton(
        VerifyBookingOtpUseCase,
        uow_factory=unit_of_work.provider,
        otp_service=otp_service,
        email_sender=email_sender,
        clock=clock,
    )
    resend_otp_use_case = providers.Singleton(
        ResendOtpUseCase,
        uow_factory=unit_of_work.provider,
        otp_service=otp_service,
        email_sender=email_sender,
    )
    get_booking_use_case = providers.Singleton(GetBookingUseCase, uow_factory=unit_of_work.provider)
    view_booking_by_token_use_case = providers.Singleton(
        ViewBookingByTokenUseCase, uow_factory=unit_of_work.provider
    )
    list_bookings_by_email_use_case = providers.Singleton(
        ListBookingsByEmailUseCase, uow_factory=unit_of_work.provider
    )
    list_bookings_use_case = providers.Singleton(
        ListBookingsUseCase, uow_factory=unit_of_work.provider
    )

    # Room use cases
    create_room_use_case = providers.Singleton(
        CreateRoomUseCase, uow_factory=unit_of_work.provider, clock=clock
    )
    update_room_use_case = providers.Singleton(
        UpdateRoomUseCase, uow_factory=unit_of_work.provider, clock=clock
    )
    update_room_status_use_case = providers.Singleton(
        UpdateRoomStatusUseCase, uow_factory=unit_of_work.provider, clock=clock
    )
    delete_room_use_case = providers.Singleton(
        DeleteRoomUseCase, uow_factory=unit_of_work.provider, clock=clock
    )
    get_room_use_case = providers.Singleton(GetRoomUseCase, uow_factory=unit_of_work.provider)
    list_rooms_use_case = providers.Singleton(ListRoomsUseCase, uow_factory=unit_of_work.provider)
    check_room_availability_use_case = providers.Singleton(
        CheckRoomAvailabilityUseCase, uow_factory=unit_of_work.provider
    )
    get_room_revenue_use_case = providers.Singleton(
        GetRoomRevenueUseCase, uow_factory=unit_of_work.provider
    )
    get_room_occupancy_rate_use_case = providers.Singleton(
        GetRoomOccupancyRateUseCase, uow_factory=unit_of_work.provider
    )

    # Housekeeping
    cleanup_expired_otps_use_case = providers.Singleton(
        CleanupExpiredOtpsUseCase, uow_factory=unit_of_work.provider, otp_service=otp_service
    )

    # Facade
    booking_orchestrator = providers.Singleton(
        BookingOrchestrator,
        create_booking=create_booking_use_case,
        update_booking_dates=update_booking_dates_use_case,
        update_booking_status=update_booking_status_use_case,
        cancel_booking=cancel_booking_use_case,
        verify_booking_otp=verify_booking_otp_use_case,
        resend_otp=resend_otp_use_case,
        get_booking=get_booking_use_case,
        view_booking_by_token=view_booking_by_token_use_case,
        list_bookings_by_email=list_bookings_by_email_use_case,
        list_bookings=list_bookings_use_case,
        create_room=create_room_use_case,
        update_room=update_room_use_case,
        update_room_status=update_room_status_use_case,
        delete_room=delete_room_use_case,
        get_room=get_room_use_case,
        list_rooms=list_rooms_use_case,
        check_room_availability=check_room_availability_use_case,
        get_room_revenue=get_room_revenue_use_case,
        get_room_occupancy_rate=get_room_occupancy_rate_use_case,
        cleanup_expired_otps=cleanup_expired_otps_use_case,
    )


container = Container()


def setup() -> None:
    container.config_service()


async def cleanup() -> None:
    await container.database().dispose()
    container.reset_singletons()

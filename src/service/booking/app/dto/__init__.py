"""Application layer DTOs"""

from src.service.booking.app.dto.booking_dto import BookingCreatedDto, BookingDto
from src.service.booking.app.dto.operation_result import OperationResult
from src.service.booking.app.dto.room_dto import RoomDto, RoomOccupancyDto, RoomRevenueDto

__all__ = [
    'BookingCreatedDto',
    'BookingDto',
    'OperationResult',
    'RoomDto',
    'RoomOccupancyDto',
    'RoomRevenueDto',
]

from enum import StrEnum


class RoomStatus(StrEnum):
    AVAILABLE = 'available'
    INACTIVE = 'inactive'
    MAINTENANCE = 'maintenance'
    OCCUPIED = 'occupied'
    BOOKED = 'booked'

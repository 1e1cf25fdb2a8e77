"""Unit tests for booking value objects"""

import attrs
import pytest

from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.value_object import ContactInfo, RoomImage


@pytest.mark.unit
class TestContactInfo:
    def test_equality_by_value(self) -> None:
        assert ContactInfo(phone='1', address='x') == ContactInfo(phone='1', address='x')

    def test_immutable(self) -> None:
        contact = ContactInfo(phone='1', address='x')

        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            contact.phone = '2'  # type: ignore[misc]

    @pytest.mark.parametrize('phone, address', [('', 'x'), ('1', '   ')])
    def test_blank_values_rejected(self, phone: str, address: str) -> None:
        with pytest.raises(DomainError):
            ContactInfo(phone=phone, address=address)


@pytest.mark.unit
class TestRoomImage:
    def test_blank_file_name_rejected(self) -> None:
        with pytest.raises(DomainError, match='Image file name is required.'):
            RoomImage(file_name=' ')

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class ContactInfo:
    """Guest phone and postal address; immutable once attached to a booking."""

    phone: str
    address: str

    def __attrs_post_init__(self) -> None:
        if not self.phone or not self.phone.strip():
            raise DomainError('Phone number is required.')
        if not self.address or not self.address.strip():
            raise DomainError('Address is required.')

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class RoomImage:
    file_name: str

    def __attrs_post_init__(self) -> None:
        if not self.file_name or not self.file_name.strip():
            raise DomainError('Image file name is required.')

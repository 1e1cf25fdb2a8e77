import bcrypt

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_otp_hasher import IOtpHasher


class BcryptOtpHasher(IOtpHasher):
    """Concrete bcrypt implementation of IOtpHasher"""

    def __init__(self, *, rounds: int = 12) -> None:
        self.rounds = rounds

    @Logger.io
    def hash_code(self, *, code: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(code.encode('utf-8'), salt).decode('utf-8')

    @Logger.io
    def verify_code(self, *, code: str, code_hash: str) -> bool:
        try:
            return bcrypt.checkpw(code.encode('utf-8'), code_hash.encode('utf-8'))
        except ValueError:
            # Malformed stored hash
            return False

from abc import ABC, abstractmethod


class IOtpHasher(ABC):
    """Abstract interface for one-way OTP hashing"""

    @abstractmethod
    def hash_code(self, *, code: str) -> str:
        pass

    @abstractmethod
    def verify_code(self, *, code: str, code_hash: str) -> bool:
        pass

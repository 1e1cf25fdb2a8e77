from typing import Generic, Optional, Tuple, TypeVar

import attrs


T = TypeVar('T')


@attrs.define(frozen=True)
class OperationResult(Generic[T]):
    """
    Uniform outcome returned across the orchestrator boundary

    `status_code` follows HTTP semantics so a transport layer can map it
    directly (400 rule violation, 403 not allowed, 404 missing, 500 failure).
    """

    success: bool
    status_code: int
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Tuple[str, ...] = ()

    @classmethod
    def ok(
        cls, data: Optional[T] = None, *, message: Optional[str] = None, status_code: int = 200
    ) -> 'OperationResult[T]':
        return cls(success=True, status_code=status_code, message=message, data=data)

    @classmethod
    def fail(
        cls, message: str, *, status_code: int = 400, errors: Tuple[str, ...] = ()
    ) -> 'OperationResult[T]':
        return cls(success=False, status_code=status_code, message=message, errors=errors)

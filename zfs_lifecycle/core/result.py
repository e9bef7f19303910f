from typing import Generic, TypeVar, Optional, cast
from dataclasses import dataclass

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of an inspection or lifecycle call: a value or the error that prevented it.

    A successful result may carry ``None``; queries use that to report a
    dataset that does not exist.
    """
    _value: Optional[T] = None
    _error: Optional[E] = None
    _ok: bool = True

    def __post_init__(self):
        if self._ok == (self._error is not None):
            raise ValueError("Result must be either ok without error or failed with an error")

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        return cls(_value=value, _ok=True)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        return cls(_error=error, _ok=False)

    @property
    def is_success(self) -> bool:
        return self._ok

    @property
    def is_failure(self) -> bool:
        return not self._ok

    @property
    def value(self) -> T:
        """Success value; raises ValueError on a failed result."""
        if not self._ok:
            raise ValueError(f"No value on failed result: {self._error}")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """Failure error; raises ValueError on a successful result."""
        if self._ok:
            raise ValueError("No error on successful result")
        return cast(E, self._error)

    def to_dict(self) -> dict:
        if self._ok:
            return {'success': True, 'value': self._value, 'error': None}
        error = cast(E, self._error)
        return {
            'success': False,
            'value': None,
            'error': error.to_dict() if hasattr(error, 'to_dict') else str(error)
        }

    def __bool__(self) -> bool:
        return self._ok

    def __repr__(self) -> str:
        if self._ok:
            return f"Success({self._value!r})"
        return f"Failure({self._error!r})"

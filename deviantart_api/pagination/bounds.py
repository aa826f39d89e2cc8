"""
Bounded Values - cursors and page sizes constrained to [min, max]

One generic component serves both integer offsets and calendar-date offsets.
The out-of-range behaviour is a policy picked at construction:

- CLAMP: snap to the nearest bound (page sizes, server-driven offsets)
- WRAP:  snap to the opposite bound (cyclic traversal of the daily feed)

Corrections never raise. They are logged and reported to an optional
on_correction(requested, corrected) hook.

Usage:
    offset = BoundedValue(min=0, max=50000, default=0)
    offset.set(-10)        # clamps to 0
    limit = Limit(min=1, max=120, default=10)
"""
import logging
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

CorrectionHook = Callable[[Any, Any], None]


class CorrectionPolicy(str, Enum):
    """How an out-of-range value is brought back into bounds."""
    CLAMP = "clamp"
    WRAP = "wrap"


class BoundedValue(Generic[T]):
    """
    A value of any totally ordered type kept within [min, max].

    Attributes:
        min: Lowest allowed value
        max: Highest allowed value
        default: Value restored by reset()
        policy: CorrectionPolicy applied by set()
    """

    def __init__(
        self,
        min: T,
        max: T,
        default: T,
        policy: CorrectionPolicy = CorrectionPolicy.CLAMP,
        on_correction: Optional[CorrectionHook] = None,
        name: str = "",
    ):
        if not (min <= default <= max):
            raise ValueError(
                f"BoundedValue requires min <= default <= max, "
                f"got min={min!r} default={default!r} max={max!r}"
            )
        self.min = min
        self.max = max
        self.default = default
        self.policy = CorrectionPolicy(policy)
        self.on_correction = on_correction
        self.name = name or type(self).__name__
        self._current: T = default

    @property
    def value(self) -> T:
        return self._current

    def get(self) -> T:
        return self._current

    def set(self, value: T) -> T:
        """Correct value according to the policy, store it and return it."""
        corrected = self._correct(value)
        if corrected != value:
            logger.warning(
                f"[{self.name}] {value!r} outside [{self.min!r}, {self.max!r}], "
                f"{self.policy.value} to {corrected!r}"
            )
            if self.on_correction is not None:
                self.on_correction(value, corrected)
        self._current = corrected
        return corrected

    def reset(self) -> T:
        self._current = self.default
        return self._current

    def _correct(self, value: T) -> T:
        if value < self.min:
            return self.max if self.policy is CorrectionPolicy.WRAP else self.min
        if value > self.max:
            return self.min if self.policy is CorrectionPolicy.WRAP else self.max
        return value

    def __repr__(self) -> str:
        return (
            f"<{self.name} value={self._current!r} min={self.min!r} "
            f"max={self.max!r} policy={self.policy.value}>"
        )


class Limit(BoundedValue[T]):
    """Page size. Always clamps; a wrapping page size has no meaning."""

    def __init__(
        self,
        min: T,
        max: T,
        default: T,
        on_correction: Optional[CorrectionHook] = None,
        name: str = "",
    ):
        super().__init__(
            min=min,
            max=max,
            default=default,
            policy=CorrectionPolicy.CLAMP,
            on_correction=on_correction,
            name=name or "Limit",
        )

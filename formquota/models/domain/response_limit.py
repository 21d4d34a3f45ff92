"""
Response limit - how many times an option may be selected.

A limit is either Unlimited or Capped(ceiling). Storage maps Unlimited to
NULL; no numeric sentinel stands in for "no ceiling".
"""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Unlimited:
    """Option without a ceiling"""

    is_unlimited = True

    def admits(self, consumed: int) -> bool:
        return True

    def is_exhausted(self, consumed: int) -> bool:
        return False

    def to_db(self) -> Optional[int]:
        return None


@dataclass(frozen=True)
class Capped:
    """Option that admits at most `ceiling` submissions"""
    ceiling: int

    is_unlimited = False

    def __post_init__(self):
        if isinstance(self.ceiling, bool) or not isinstance(self.ceiling, int):
            raise TypeError(f"Response limit must be an integer, got {self.ceiling!r}")
        if self.ceiling < 0:
            raise ValueError(f"Response limit must be non-negative, got {self.ceiling}")

    def admits(self, consumed: int) -> bool:
        """True while another submission still fits under the ceiling"""
        return consumed < self.ceiling

    def is_exhausted(self, consumed: int) -> bool:
        return consumed >= self.ceiling

    def to_db(self) -> Optional[int]:
        return self.ceiling


ResponseLimit = Union[Unlimited, Capped]

UNLIMITED = Unlimited()


def response_limit_from_db(value: Optional[int]) -> ResponseLimit:
    """Map a nullable response_limit column to a ResponseLimit"""
    if value is None:
        return UNLIMITED
    return Capped(int(value))

"""
Extended scores: finite integers plus explicit +/- infinity sentinels.

Alpha-beta bounds need "worse than anything" and "better than anything"
values. Instead of a large literal standing in for infinity, a score is a
small tagged value ordered as

    NEGATIVE_INFINITY < finite(n) < POSITIVE_INFINITY   for every integer n

and negation swaps the two sentinels. Ordering and equality come from the
dataclass field order (kind, value); sentinels always carry value 0, so
two sentinels of the same kind compare equal.
"""

from dataclasses import dataclass

_NEG_INF = -1
_FINITE = 0
_POS_INF = 1


@dataclass(frozen=True, order=True)
class ExtendedScore:
    """
    A score on the extended integer line.

    Construct finite values with ExtendedScore.finite(n); use the module
    constants for the sentinels.
    """

    kind: int
    value: int = 0

    @classmethod
    def finite(cls, value: int) -> "ExtendedScore":
        return cls(_FINITE, int(value))

    @property
    def is_finite(self) -> bool:
        return self.kind == _FINITE

    def __neg__(self) -> "ExtendedScore":
        if self.kind == _FINITE:
            return ExtendedScore(_FINITE, -self.value)
        return ExtendedScore(-self.kind, 0)

    def to_int(self) -> int:
        """
        Return the finite value.

        Raises:
            ValueError: If the score is one of the infinity sentinels.
        """
        if self.kind != _FINITE:
            raise ValueError(f"Cannot convert {self} to int")
        return self.value

    def __str__(self) -> str:
        if self.kind == _POS_INF:
            return "+inf"
        if self.kind == _NEG_INF:
            return "-inf"
        return str(self.value)


NEGATIVE_INFINITY = ExtendedScore(_NEG_INF)
POSITIVE_INFINITY = ExtendedScore(_POS_INF)

"""Rank-one tensors whose factors are truncated power series in e over GF(2)."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field

N = 16
"""Number of unknowns in each factor; factor coefficients are N-bit masks."""

DEFAULT_MAX_ORDER = 4
"""Default truncation order: schemes are only considered up to O(e^max_order)."""

FACTOR_NAMES = ("a", "b", "c")

_MASK = (1 << N) - 1


def _leading_zero_terms(factor: list[int]) -> int:
    """Return the index of the first non-zero power, or len(factor) if none."""
    return next((power for power, bits in enumerate(factor) if bits), len(factor))


@dataclass
class Rank1Tensor:
    """A term e^coeff * (a)(b)(c).

    Each factor is a list indexed by the power of e; the entry is a bit mask
    over the N unknowns, bit j meaning that unknown j is present.
    """

    max_order: int = DEFAULT_MAX_ORDER
    coeff: int = 0
    a: list[int] = field(default_factory=list)
    b: list[int] = field(default_factory=list)
    c: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_order < 1:
            raise ValueError(f"max_order must be positive, got {self.max_order}")
        for name in FACTOR_NAMES:
            factor = getattr(self, name)
            if not factor:
                setattr(self, name, [0] * self.max_order)
                continue
            if len(factor) != self.max_order:
                raise ValueError(
                    f"factor {name} has {len(factor)} powers, expected {self.max_order}"
                )
            if any(bits < 0 or bits > _MASK for bits in factor):
                raise ValueError(f"factor {name} holds a value outside {N} bits")
            setattr(self, name, list(factor))

    def update(self) -> bool:
        """Pull common powers of e out of the factors into the coefficient.

        Returns True when the term vanishes to the working order and should be
        removed; otherwise the factors are shifted down and False is returned.
        """
        i = _leading_zero_terms(self.a)
        j = _leading_zero_terms(self.b)
        k = _leading_zero_terms(self.c)
        if i + j + k + self.coeff >= self.max_order:
            return True
        self.coeff += i + j + k
        span = self.max_order - self.coeff
        for name, shift in zip(FACTOR_NAMES, (i, j, k)):
            if shift > 0:
                factor = getattr(self, name)
                factor[:span] = factor[shift:shift + span]
        return False

    def copy(self) -> Rank1Tensor:
        """Return an independent copy of this tensor."""
        return _copy.deepcopy(self)
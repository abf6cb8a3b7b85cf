"""Collections of rank-one tensors and the random flip walk over them."""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .notation import format_scheme, parse_scheme
from .tensor import DEFAULT_MAX_ORDER, FACTOR_NAMES, N, Rank1Tensor

# For each factor, the two factors whose agreement makes an eflip around it possible.
_EFLIP_PARTNERS = (("a", ("b", "c")), ("b", ("a", "c")), ("c", ("a", "b")))

# For a flip around a factor: the factor moved into the second tensor,
# then the factor moved into the first one.
_FLIP_TARGETS = {"a": ("c", "b"), "b": ("a", "c"), "c": ("b", "a")}


@dataclass(frozen=True)
class Move:
    """A possible move: a flip when ``third`` is None, otherwise an eflip."""

    first: int
    second: int
    third: int | None
    factor: str


def _common_prefix(left: list[int], right: list[int]) -> int:
    """Return how many leading powers two factors share."""
    return next(
        (power for power, (x, y) in enumerate(zip(left, right)) if x != y),
        min(len(left), len(right)),
    )


def _check_factor(flip_around: str) -> None:
    if flip_around not in FACTOR_NAMES:
        raise ValueError(f"cannot flip around {flip_around!r}; expected one of a, b, c")


class Scheme:
    """A sum of rank-one tensors, kept modulo e^max_order."""

    def __init__(
        self,
        tensors: Iterable[Rank1Tensor] = (),
        max_order: int = DEFAULT_MAX_ORDER,
        rng: random.Random | None = None,
    ) -> None:
        self.max_order = max_order
        self.tensors: list[Rank1Tensor] = list(tensors)
        for tensor in self.tensors:
            if tensor.max_order != max_order:
                raise ValueError(
                    f"tensor has max_order {tensor.max_order}, scheme has {max_order}"
                )
        self.moves: list[Move] = []
        self.rng = rng if rng is not None else random.Random()

    def __len__(self) -> int:
        return len(self.tensors)

    @classmethod
    def from_text(
        cls,
        text: str,
        max_order: int = DEFAULT_MAX_ORDER,
        rng: random.Random | None = None,
    ) -> Scheme:
        """Build a scheme from its text notation and normalise it."""
        scheme = cls(parse_scheme(text, max_order), max_order, rng)
        scheme.update()
        return scheme

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        max_order: int = DEFAULT_MAX_ORDER,
        rng: random.Random | None = None,
    ) -> Scheme:
        """Read a scheme from a file in the text notation."""
        return cls.from_text(Path(path).read_text(), max_order, rng)

    def update(self) -> bool:
        """Normalise every tensor, apply reductions and rebuild the move list.

        Returns True if at least one reduction removed a tensor.
        """
        reduced = False
        while self._update_pass():
            reduced = True
        return reduced

    def _update_pass(self) -> bool:
        self.moves.clear()
        for index, tensor in enumerate(self.tensors):
            if tensor.update():
                del self.tensors[index]
                return True

        order = self.max_order
        count = len(self.tensors)
        for i in range(count - 1):
            tensor1 = self.tensors[i]
            for j in range(i + 1, count):
                tensor2 = self.tensors[j]
                eq = {
                    name: _common_prefix(getattr(tensor1, name), getattr(tensor2, name))
                    for name in FACTOR_NAMES
                }
                for name in FACTOR_NAMES:
                    if eq[name] >= order - tensor1.coeff or eq[name] >= order - tensor2.coeff:
                        self.moves.append(Move(i, j, None, name))

                for target, (x, y) in _EFLIP_PARTNERS:
                    if eq[x] <= 0 or eq[y] <= 0:
                        continue
                    min_eq = min(eq[x], eq[y])
                    max_coeff = max(tensor1.coeff, tensor2.coeff)
                    if order - min_eq <= max_coeff:
                        if tensor1.coeff == max_coeff:
                            self._fold(tensor1, tensor2, target)
                            del self.tensors[i]
                        else:
                            self._fold(tensor2, tensor1, target)
                            del self.tensors[j]
                        return True
                    for k, tensor3 in enumerate(self.tensors):
                        if k in (i, j):
                            continue
                        eq1 = _common_prefix(getattr(tensor1, target), getattr(tensor3, target))
                        eq2 = _common_prefix(getattr(tensor2, target), getattr(tensor3, target))
                        if eq1 >= order - min_eq - tensor1.coeff:
                            self.moves.append(Move(i, j, k, target))
                        if eq2 >= order - min_eq - tensor2.coeff:
                            self.moves.append(Move(j, i, k, target))
        return False

    def _fold(self, removed: Rank1Tensor, kept: Rank1Tensor, name: str) -> None:
        """Add the factor of ``removed`` into ``kept`` before ``removed`` is dropped."""
        powdiff = removed.coeff - kept.coeff
        source = getattr(removed, name)
        target = getattr(kept, name)
        for power in range(max(0, self.max_order - kept.coeff - powdiff)):
            target[power + powdiff] ^= source[power]

    def _shift_add(
        self,
        target: Rank1Tensor,
        source: Rank1Tensor,
        name: str,
        powdiff: int,
        lowered_coeff: int,
    ) -> None:
        """Add e^powdiff times the source factor into the target factor."""
        order = self.max_order
        dst = getattr(target, name)
        src = getattr(source, name)
        if powdiff >= 0:
            for power in range(powdiff, order):
                dst[power] ^= src[power - powdiff]
            return
        target.coeff = lowered_coeff
        for power in range(order - 1, -powdiff - 1, -1):
            dst[power] = src[power] ^ dst[power + powdiff]
        for power in range(-powdiff - 1, -1, -1):
            dst[power] = src[power]

    def flip(self, ind1: int, ind2: int, flip_around: str) -> bool:
        """Apply a random flip between two tensors sharing a factor.

        Returns True if the subsequent update reduced the scheme.
        """
        _check_factor(flip_around)
        order = self.max_order
        tensor1 = self.tensors[ind1]
        tensor2 = self.tensors[ind2]
        w1 = self.rng.randrange(tensor1.coeff + 1)
        w2 = self.rng.randrange(tensor2.coeff + 1)
        k = self.rng.randrange(order)

        shared1 = getattr(tensor1, flip_around)
        shared2 = getattr(tensor2, flip_around)
        if tensor1.coeff <= tensor2.coeff:
            for power in range(order - tensor2.coeff, order):
                shared2[power] = shared1[power]
        else:
            for power in range(order - tensor1.coeff, order):
                shared1[power] = shared2[power]

        into_second, into_first = _FLIP_TARGETS[flip_around]
        powdiff = k + tensor1.coeff + w2 - w1 - tensor2.coeff
        self._shift_add(
            tensor2, tensor1, into_second, powdiff, k + tensor1.coeff - w1 + w2
        )
        powdiff = k + w2 - w1
        self._shift_add(
            tensor1, tensor2, into_first, powdiff, tensor1.coeff + powdiff
        )
        return self.update()

    def eflip(self, ind1: int, ind2: int, ind3: int, flip_around: str) -> bool:
        """Align the first tensor with the third, compensate in the second, then flip.

        Returns True if the flip's update reduced the scheme.
        """
        _check_factor(flip_around)
        order = self.max_order
        tensor1 = self.tensors[ind1]
        tensor2 = self.tensors[ind2]
        tensor3 = self.tensors[ind3]
        factor1 = getattr(tensor1, flip_around)
        factor2 = getattr(tensor2, flip_around)
        factor3 = getattr(tensor3, flip_around)

        shifted_g = [x ^ y for x, y in zip(factor1, factor3)]
        factor1[:] = factor3
        shift = tensor1.coeff - tensor2.coeff
        start = -shift if shift < 0 else 0
        for power in range(start, min(order, order - shift)):
            factor2[power + shift] ^= shifted_g[power]

        if self.rng.randrange(2) == 0:
            return self.flip(ind1, ind3, flip_around)
        return self.flip(ind3, ind1, flip_around)

    def random_walk(self, pathlength: int) -> None:
        """Take up to ``pathlength`` random moves, stopping when none is left."""
        for _ in range(pathlength):
            if not self.moves:
                break
            move = self.moves[self.rng.randrange(len(self.moves))]
            if move.third is None:
                if self.rng.randrange(2):
                    self.flip(move.first, move.second, move.factor)
                else:
                    self.flip(move.second, move.first, move.factor)
            else:
                self.eflip(move.first, move.second, move.third, move.factor)

    def format(self) -> str:
        """Render the scheme in the text notation, one tensor per line."""
        return format_scheme(self.tensors)

    def write_to_file(self, directory: str | Path = ".") -> Path:
        """Write the scheme to a randomly named ``k<number>.exp`` file and return its path."""
        path = Path(directory) / f"k{self.rng.randrange(2**31)}.exp"
        path.write_text(self.format() + "\n")
        return path

    def check(self) -> list[str]:
        """List the monomials of the expanded scheme, as ``a<i> b<j> c<k> * e^<p>``."""
        return [
            f"a{i} b{j} c{k} * e^{power}"
            for power, i, j, k in _odd_monomials(self.tensors, self.max_order)
        ]


def _bits(mask: int) -> Iterator[int]:
    return (index for index in range(N) if mask >> index & 1)


def _odd_monomials(
    tensors: Iterable[Rank1Tensor], max_order: int
) -> list[tuple[int, int, int, int]]:
    """Return the (power, i, j, k) monomials with odd multiplicity, sorted."""
    odd: set[tuple[int, int, int, int]] = set()
    for tensor in tensors:
        for power in range(tensor.coeff, max_order):
            rest = power - tensor.coeff
            for pow1 in range(rest + 1):
                for pow2 in range(rest - pow1 + 1):
                    pow3 = rest - pow1 - pow2
                    for i in _bits(tensor.a[pow1]):
                        for j in _bits(tensor.b[pow2]):
                            for k in _bits(tensor.c[pow3]):
                                odd ^= {(power, i, j, k)}
    return sorted(odd)


def expanded(scheme: Scheme) -> Scheme:
    """Return the scheme multiplied out into single monomials, mod e^max_order."""
    result = Scheme(max_order=scheme.max_order)
    for power, i, j, k in _odd_monomials(scheme.tensors, scheme.max_order):
        tensor = Rank1Tensor(max_order=scheme.max_order, coeff=power)
        tensor.a[0] = 1 << i
        tensor.b[0] = 1 << j
        tensor.c[0] = 1 << k
        result.tensors.append(tensor)
    return result
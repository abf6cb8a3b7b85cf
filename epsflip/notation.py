"""Reading and writing schemes in the e^k*(a..)(b..)(c..) text notation."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .tensor import FACTOR_NAMES, N, Rank1Tensor

_COEFF_RE = re.compile(r"e(\^(\d+))?\*")
_GROUP_RE = re.compile(r"\((.*?)\)")
_TERM_RE = re.compile(r"([abc])(\d+)(\*e(\^(\d+))?)?")


def parse_line(line: str, max_order: int) -> Rank1Tensor:
    """Parse one line of notation into a tensor.

    Terms that do not match the notation, or whose index or power is out of
    range, are ignored.
    """
    tensor = Rank1Tensor(max_order=max_order)
    match = _COEFF_RE.search(line)
    if match:
        tensor.coeff = int(match.group(2)) if match.group(2) is not None else 1
        line = line[len(match.group(0)):]
    for group in list(_GROUP_RE.finditer(line))[:3]:
        for term in group.group(1).split("+"):
            term_match = _TERM_RE.fullmatch(term)
            if not term_match:
                continue
            var = term_match.group(1)
            index = int(term_match.group(2))
            if term_match.group(5) is not None:
                power = int(term_match.group(5))
            else:
                power = 1 if term_match.group(3) is not None else 0
            if not (0 <= index < N and 0 <= power < max_order):
                continue
            getattr(tensor, var)[power] |= 1 << index
    return tensor


def parse_scheme(text: str, max_order: int) -> list[Rank1Tensor]:
    """Parse a whole scheme, one tensor per line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [parse_line(line, max_order) for line in lines]


def _format_factor(tensor: Rank1Tensor, name: str) -> str:
    factor = getattr(tensor, name)
    terms = []
    for power in range(tensor.max_order - tensor.coeff):
        bits = factor[power]
        for index in range(N):
            if bits >> index & 1:
                term = f"{name}{index}"
                if power > 0:
                    term += "*e" if power == 1 else f"*e^{power}"
                terms.append(term)
    return "(" + "+".join(terms) + ")"


def format_tensor(tensor: Rank1Tensor) -> str:
    """Render a tensor in the text notation."""
    prefix = ""
    if tensor.coeff > 0:
        prefix = "e*" if tensor.coeff == 1 else f"e^{tensor.coeff}*"
    return prefix + "".join(_format_factor(tensor, name) for name in FACTOR_NAMES)


def format_scheme(tensors: Iterable[Rank1Tensor]) -> str:
    """Render tensors one per line, without a trailing newline."""
    return "\n".join(format_tensor(tensor) for tensor in tensors)
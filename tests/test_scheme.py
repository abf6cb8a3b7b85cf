import random

import pytest

from epsflip.scheme import Move, Scheme, expanded
from epsflip.tensor import Rank1Tensor

SHARED_A = "(a0)(b0)(c0)\n(a0)(b1)(c1)\n"
GRID = "(a0)(b0)(c0)\n(a0)(b1)(c1)\n(a1)(b0)(c1)\n(a1)(b1)(c0)\n"


def _expanded_text(scheme):
    return expanded(scheme).format()


def test_shared_factor_gives_single_flip_move():
    scheme = Scheme.from_text(SHARED_A, max_order=4, rng=random.Random(1))
    assert len(scheme) == 2
    assert scheme.moves == [Move(0, 1, None, "a")]


def test_identical_tensors_cancel():
    scheme = Scheme.from_text("(a0)(b0)(c0)\n(a0)(b0)(c0)\n", max_order=4)
    assert len(scheme) == 0
    assert scheme.moves == []


def test_term_beyond_order_is_removed():
    scheme = Scheme.from_text("e^4*(a0)(b0)(c0)\n(a1)(b1)(c1)\n", max_order=4)
    assert scheme.format() == "(a1)(b1)(c1)"


def test_update_pulls_powers_into_coefficient():
    scheme = Scheme.from_text("(a0*e^2)(b0*e)(c0)", max_order=4)
    assert scheme.format() == "e^3*(a0)(b0)(c0)"


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("factor", ["a"])
def test_flip_preserves_expansion(seed, factor):
    scheme = Scheme.from_text(SHARED_A, max_order=4, rng=random.Random(seed))
    before = _expanded_text(scheme)
    scheme.flip(0, 1, factor)
    assert _expanded_text(scheme) == before


@pytest.mark.parametrize("seed", range(8))
def test_random_walk_preserves_expansion(seed):
    scheme = Scheme.from_text(GRID, max_order=3, rng=random.Random(seed))
    before = _expanded_text(scheme)
    scheme.random_walk(40)
    assert _expanded_text(scheme) == before


def test_random_walk_without_moves_changes_nothing():
    text = "(a0)(b0)(c0)\n(a1)(b1)(c1)"
    scheme = Scheme.from_text(text, max_order=4, rng=random.Random(3))
    assert scheme.moves == []
    scheme.random_walk(10)
    assert scheme.format() == text


def test_flip_rejects_unknown_factor():
    scheme = Scheme.from_text(SHARED_A, max_order=4)
    with pytest.raises(ValueError):
        scheme.flip(0, 1, "d")


def test_eflip_rejects_unknown_factor():
    scheme = Scheme.from_text(GRID, max_order=3)
    with pytest.raises(ValueError):
        scheme.eflip(0, 1, 2, "x")


def test_mismatched_max_order_rejected():
    with pytest.raises(ValueError):
        Scheme([Rank1Tensor(max_order=3)], max_order=4)


def test_check_lists_monomials():
    scheme = Scheme.from_text("(a0)(b1)(c2)", max_order=4)
    assert scheme.check() == ["a0 b1 c2 * e^0"]


def test_expanded_splits_sums():
    scheme = Scheme.from_text("(a0+a1)(b0)(c0)", max_order=4)
    result = expanded(scheme)
    assert result.format() == "(a0)(b0)(c0)\n(a1)(b0)(c0)"
    assert result.max_order == scheme.max_order


def test_check_agrees_with_expanded():
    scheme = Scheme.from_text(GRID, max_order=3)
    lines = scheme.check()
    assert len(lines) == len(expanded(scheme))
    assert lines == sorted(set(lines), key=lines.index)


def test_write_and_read_round_trip(tmp_path):
    scheme = Scheme.from_text("(a0)(b0)(c0)\n(a1)(b1+b2*e)(c1)", max_order=4, rng=random.Random(5))
    path = scheme.write_to_file(tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith("k") and path.name.endswith(".exp")
    assert path.read_text().endswith("\n")
    again = Scheme.from_file(path, max_order=4)
    assert again.format() == scheme.format()


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Scheme.from_file(tmp_path / "absent.exp")
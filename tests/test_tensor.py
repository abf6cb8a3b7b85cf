import pytest

from epsflip.tensor import N, Rank1Tensor


def test_default_tensor_is_zero():
    tensor = Rank1Tensor(max_order=5)
    assert tensor.coeff == 0
    assert tensor.a == [0] * 5
    assert tensor.b == [0] * 5
    assert tensor.c == [0] * 5


def test_wrong_factor_length_rejected():
    with pytest.raises(ValueError):
        Rank1Tensor(max_order=3, a=[1, 0])


def test_out_of_range_bits_rejected():
    with pytest.raises(ValueError):
        Rank1Tensor(max_order=2, b=[1 << N, 0])


def test_nonpositive_order_rejected():
    with pytest.raises(ValueError):
        Rank1Tensor(max_order=0)


def test_update_keeps_unshifted_tensor():
    tensor = Rank1Tensor(max_order=4, a=[1, 0, 0, 0], b=[2, 0, 0, 0], c=[4, 0, 0, 0])
    assert tensor.update() is False
    assert tensor.coeff == 0
    assert tensor.a == [1, 0, 0, 0]


def test_update_pulls_out_powers():
    tensor = Rank1Tensor(max_order=4, a=[0, 3, 5, 0], b=[1, 0, 0, 0], c=[0, 2, 0, 0])
    assert tensor.update() is False
    assert tensor.coeff == 2
    assert tensor.a[:2] == [3, 5]
    assert tensor.c[:2] == [2, 0]
    assert tensor.b[:2] == [1, 0]


def test_update_removes_vanishing_term():
    tensor = Rank1Tensor(max_order=4, coeff=1, a=[0, 0, 1, 0], b=[1, 0, 0, 0], c=[0, 1, 0, 0])
    assert tensor.update() is True


def test_update_removes_zero_factor():
    tensor = Rank1Tensor(max_order=3, a=[1, 0, 0], b=[1, 0, 0])
    assert tensor.update() is True


def test_copy_is_independent():
    tensor = Rank1Tensor(max_order=2, a=[1, 0], b=[1, 0], c=[1, 0])
    duplicate = tensor.copy()
    duplicate.a[0] = 2
    duplicate.coeff = 1
    assert tensor.a == [1, 0]
    assert tensor.coeff == 0
    assert duplicate == Rank1Tensor(max_order=2, coeff=1, a=[2, 0], b=[1, 0], c=[1, 0])
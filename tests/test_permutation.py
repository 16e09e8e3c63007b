from hypothesis import given, strategies as st
import numpy as np
import pytest

from permcycles import PermutationTable, TableBuilder, PermutationError, SizeMismatchError

from strategies import tables, table_pairs


def test_init():
    p = PermutationTable([2, 0, 1])
    assert list(p) == [2, 0, 1]
    assert len(p) == 3
    assert p[0] == 2


@pytest.mark.parametrize("table", [
    [0, 0, 1],
    [1, 2, 3],
    [-1, 0, 1],
])
def test_init_rejects_non_bijection(table):
    with pytest.raises(PermutationError):
        PermutationTable(table)


def test_init_size_mismatch():
    with pytest.raises(SizeMismatchError):
        PermutationTable([1, 0], size=3)


def test_identity():
    id3 = PermutationTable.identity(3)
    assert list(id3) == [0, 1, 2]
    assert id3.is_identity()
    assert PermutationTable.identity(0).to_sequence() == []


def test_cyclic():
    assert list(PermutationTable.cyclic(4)) == [1, 2, 3, 0]
    assert list(PermutationTable.cyclic(4, 3)) == [3, 0, 1, 2]


def test_transposition():
    t = PermutationTable.transposition(4, 1, 3)
    assert list(t) == [0, 3, 2, 1]
    assert PermutationTable.transposition(3, 2, 2).is_identity()


@pytest.mark.parametrize("i, j", [(0, 4), (4, 0), (-1, 2)])
def test_transposition_out_of_range(i, j):
    with pytest.raises(IndexError):
        PermutationTable.transposition(4, i, j)


def test_builder():
    builder = TableBuilder(4)
    builder.swap(0, 1).swap(1, 2)
    assert list(builder.build()) == [1, 2, 0, 3]


def test_compose_order():
    a = PermutationTable([1, 2, 0])
    b = PermutationTable([0, 2, 1])
    assert list(a * b) == [a[b[i]] for i in range(3)] == [1, 0, 2]
    assert list(b * a) == [2, 1, 0]
    assert PermutationTable.compose(a, b) == a * b


def test_compose_many():
    a = PermutationTable([1, 2, 0, 3])
    b = PermutationTable.transposition(4, 0, 3)
    c = PermutationTable.cyclic(4)
    assert PermutationTable.compose(a, b, c) == a * (b * c)


def test_compose_size_mismatch():
    with pytest.raises(ValueError):
        PermutationTable([1, 0]) * PermutationTable([0, 1, 2])


def test_inverse():
    p = PermutationTable([2, 0, 1])
    assert list(p.inverse()) == [1, 2, 0]
    assert (p * p.inverse()).is_identity()


@pytest.mark.parametrize("perm, power, expected", [
    (PermutationTable([1, 2, 0]), 2, [2, 0, 1]),
    (PermutationTable([1, 2, 0]), 3, [0, 1, 2]),
    (PermutationTable([1, 2, 0]), -1, [2, 0, 1]),
    (PermutationTable([1, 0, 2]), 2, [0, 1, 2]),
])
def test_power(perm, power, expected):
    assert list(perm ** power) == expected


def test_act_scalar_wraps():
    p = PermutationTable([1, 2, 0])
    assert p.act(0) == 1
    assert p(2) == 0
    assert p.act(4) == p.act(1) == 2


def test_act_sequences():
    p = PermutationTable([1, 2, 0])
    assert p.act([0, 0, 2]) == [1, 1, 0]
    assert p.act((2, 1)) == (0, 2)
    assert p.act([[0], (1, 2)]) == [[1], (2, 0)]


def test_act_numpy():
    p = PermutationTable([1, 2, 0])
    result = p.act(np.array([[0, 1], [2, 5]]))
    assert result.tolist() == [[1, 2], [0, 0]]


@pytest.mark.parametrize("value", ["012", 1.5, {0: 1}])
def test_act_rejects(value):
    with pytest.raises(TypeError):
        PermutationTable([1, 2, 0]).act(value)


def test_act_on_table_composes():
    a = PermutationTable([1, 2, 0])
    b = PermutationTable([0, 2, 1])
    assert a.act(b) == a * b


def test_permute():
    p = PermutationTable([2, 0, 1])
    assert p.permute(['a', 'b', 'c']) == ['c', 'a', 'b']
    with pytest.raises(ValueError):
        p.permute([1, 2])


def test_serialization():
    p = PermutationTable([3, 1, 0, 2])
    assert PermutationTable.from_sequence(p.to_sequence(), 4) == p
    with pytest.raises(SizeMismatchError):
        PermutationTable.from_sequence([1, 0], 3)
    with pytest.raises(PermutationError):
        PermutationTable.from_sequence([1, 1, 0], 3)


def test_random_is_seedable():
    a = PermutationTable.random(10, rng=1234)
    b = PermutationTable.random(10, rng=np.random.default_rng(1234))
    assert a == b
    assert PermutationTable.is_permutation(list(a))


def test_random_covers_all():
    rng = np.random.default_rng(0)
    seen = {PermutationTable.random(3, rng) for _ in range(200)}
    assert len(seen) == 6


def test_conjugate():
    p = PermutationTable([1, 2, 0, 3])
    g = PermutationTable.transposition(4, 0, 3)
    assert p.conjugate(g) == g * p * g.inverse()
    assert p.is_conjugate(p.conjugate(g))
    assert not p.is_conjugate(g)


def test_on_subset():
    p = PermutationTable([2, 1, 0, 3])
    assert list(p.on_subset([1, 0, 1, 0])) == [1, 0]
    with pytest.raises(PermutationError):
        p.on_subset([1, 1, 0, 0])


def test_order_and_parity():
    p = PermutationTable([1, 0, 3, 4, 2])
    assert p.order() == 6
    assert p.parity() == 1
    assert PermutationTable.identity(4).order() == 1
    assert PermutationTable([1, 2, 3, 0]).parity() == 1
    assert PermutationTable([1, 0, 3, 2]).parity() == 0


def test_fixed_points():
    assert PermutationTable([0, 2, 1, 3]).fixed_points() == [0, 3]


@given(perm=tables())
def test_double_inverse(perm):
    assert perm.inverse().inverse() == perm


@given(perm=tables())
def test_identity_neutral(perm):
    identity = PermutationTable.identity(len(perm))
    assert perm * identity == perm == identity * perm


@given(pair=table_pairs(), x=st.integers(min_value=0, max_value=100))
def test_act_respects_composition(pair, x):
    t, u = pair
    assert (t * u).act(x) == t.act(u.act(x))


@given(pair=table_pairs())
def test_act_on_list_respects_composition(pair):
    t, u = pair
    xs = list(range(len(t)))
    assert (t * u).act(xs) == t.act(u.act(xs))


@given(perm=tables(min_n=1))
def test_power_order_is_identity(perm):
    assert (perm ** perm.order()).is_identity()


@given(perm=tables())
def test_parity_of_inverse(perm):
    assert perm.parity() == perm.inverse().parity()


@pytest.mark.parametrize("values", [
    [1.9, 0.2],
    [1.0, 0.0],
    ['1', '0'],
])
def test_from_sequence_rejects_non_integers(values):
    with pytest.raises(PermutationError):
        PermutationTable.from_sequence(values, 2)


def test_accepts_numpy_integers():
    assert PermutationTable(np.array([2, 0, 1])) == PermutationTable([2, 0, 1])


def test_act_on_empty_table():
    empty = PermutationTable.identity(0)
    with pytest.raises(IndexError):
        empty.act(0)
    with pytest.raises(IndexError):
        empty.act(np.array([0]))
    assert empty.act([]) == []


def test_ordering_with_other_types():
    p = PermutationTable([1, 0])
    with pytest.raises(TypeError):
        p < (1, 0)
    assert PermutationTable([0, 1]) < p

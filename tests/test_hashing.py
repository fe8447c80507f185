"""Tests for Hashing and HashedCrossing."""
import numpy as np
import pytest

from kerasport.layers import Hashing, HashedCrossing


def test_hashing_is_deterministic():
    layer = Hashing(num_bins=3)
    values = ['A', 'B', 'C', 'D', 'E']
    first = layer(values)
    np.testing.assert_array_equal(first, Hashing(num_bins=3)(values))
    assert first.dtype == np.int64
    assert np.all((first >= 0) & (first < 3))


def test_hashing_integers_match_their_text_form():
    layer = Hashing(num_bins=1000)
    np.testing.assert_array_equal(layer([12, 345]), layer(['12', '345']))


def test_salt_changes_buckets():
    values = [f'token-{i}' for i in range(50)]
    plain = Hashing(num_bins=1000)(values)
    salted = Hashing(num_bins=1000, salt=133)(values)
    pair = Hashing(num_bins=1000, salt=(133, 133))(values)
    assert not np.array_equal(plain, salted)
    np.testing.assert_array_equal(salted, pair)


def test_mask_value_goes_to_zero():
    layer = Hashing(num_bins=3, mask_value='')
    out = layer([['A'], [''], ['C'], ['D']])
    assert out.shape == (4, 1)
    assert out[1, 0] == 0
    assert np.all(np.delete(out.reshape(-1), 1) >= 1)
    with pytest.raises(ValueError):
        Hashing(num_bins=1, mask_value='')


def test_buckets_are_roughly_uniform():
    out = Hashing(num_bins=10)([f'item{i}' for i in range(20000)])
    counts = np.bincount(out, minlength=10)
    assert np.all((counts > 1700) & (counts < 2300)), counts


def test_output_modes():
    out = Hashing(num_bins=4, output_mode='one_hot')(['a', 'b'])
    assert out.shape == (2, 4)
    np.testing.assert_array_equal(out.sum(axis=-1), [1, 1])
    counts = Hashing(num_bins=4, output_mode='count')([['a', 'a', 'b']])
    assert counts.sum() == 3


def test_rejects_non_integral_floats():
    with pytest.raises(ValueError):
        Hashing(num_bins=4)([1.5])
    with pytest.raises(ValueError):
        Hashing(num_bins=0)


def test_hashed_crossing():
    layer = HashedCrossing(num_bins=5)
    out = layer((['A', 'B', 'A'], [101, 101, 101]))
    assert out.shape == (3,)
    assert out[0] == out[2]
    assert np.all((out >= 0) & (out < 5))
    one_hot = HashedCrossing(num_bins=5, output_mode='one_hot')(
        (['A'], [101]))
    assert one_hot.shape == (1, 5)
    with pytest.raises(ValueError):
        layer((['A'],))

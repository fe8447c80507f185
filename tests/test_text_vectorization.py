"""Tests for TextVectorization."""
import numpy as np
import pytest

from kerasport.layers import TextVectorization


def _adapted(**kwargs):
    layer = TextVectorization(**kwargs)
    layer.adapt(['The cat sat.', 'the dog sat'])
    return layer


def test_int_mode_pads_to_longest_row():
    layer = _adapted()
    assert layer.get_vocabulary() == ['', '[UNK]', 'sat', 'the', 'cat',
                                      'dog']
    out = layer(['the cat', 'a dog sat'])
    np.testing.assert_array_equal(out, [[3, 4, 0], [1, 5, 2]])


def test_output_sequence_length_pads_and_truncates():
    layer = _adapted(output_sequence_length=2)
    np.testing.assert_array_equal(layer(['the', 'a dog sat']),
                                  [[3, 0], [1, 5]])


def test_ragged_returns_rows():
    layer = _adapted(ragged=True)
    rows = layer(['the cat', 'sat'])
    assert [r.tolist() for r in rows] == [[3, 4], [2]]


def test_multi_hot_and_count():
    multi = _adapted(output_mode='multi_hot')
    assert multi.get_vocabulary() == ['[UNK]', 'sat', 'the', 'cat', 'dog']
    np.testing.assert_array_equal(multi(['the the zebra']),
                                  [[1, 0, 1, 0, 0]])
    count = _adapted(output_mode='count')
    np.testing.assert_array_equal(count(['the the zebra']),
                                  [[1, 0, 2, 0, 0]])


def test_tf_idf():
    layer = TextVectorization(output_mode='tf_idf')
    layer.adapt(['a a b', 'b c'])
    assert layer.get_vocabulary() == ['[UNK]', 'a', 'b', 'c']
    out = layer(['a a zzz'])
    idf_a = np.log(1.0 + 2.0 / 2.0)
    mean_idf = np.mean([idf_a, np.log(1.0 + 2.0 / 3.0), idf_a])
    np.testing.assert_allclose(out[0], [mean_idf, 2 * idf_a, 0, 0],
                               rtol=1e-6)


def test_standardize_and_split_options():
    layer = TextVectorization(standardize=None, split='character')
    assert layer.tokenize('Ab!') == ['A', 'b', '!']
    layer = TextVectorization(standardize='lower', split=None)
    assert layer.tokenize('Hello, World') == ['hello, world']
    layer = TextVectorization(standardize=lambda s: s.upper())
    assert layer.tokenize('a b') == ['A', 'B']
    with pytest.raises(ValueError):
        TextVectorization(standardize='upper')
    with pytest.raises(ValueError):
        TextVectorization(split='comma')


def test_ngrams():
    layer = TextVectorization(ngrams=2)
    assert layer.tokenize('the cat sat') == [
        'the', 'cat', 'sat', 'the cat', 'cat sat']
    layer = TextVectorization(ngrams=(2,))
    assert layer.tokenize('the cat sat') == ['the cat', 'cat sat']


def test_max_tokens():
    layer = _adapted(max_tokens=4)
    assert layer.get_vocabulary() == ['', '[UNK]', 'sat', 'the']


def test_fixed_vocabulary():
    layer = TextVectorization(vocabulary=['hello', 'world'])
    np.testing.assert_array_equal(layer(['hello there world']), [[2, 1, 3]])


def test_invalid_combinations():
    with pytest.raises(ValueError):
        TextVectorization(output_mode='multi_hot', output_sequence_length=4)
    with pytest.raises(ValueError):
        TextVectorization(output_mode='count', ragged=True)
    with pytest.raises(ValueError):
        TextVectorization(ngrams=2, split=None)


def test_call_before_adapt_raises():
    with pytest.raises(RuntimeError):
        TextVectorization()(['hi'])

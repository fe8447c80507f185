"""Tests for StringLookup / IntegerLookup."""
import numpy as np
import pytest

from kerasport.layers import StringLookup, IntegerLookup


def test_string_lookup_adapt_orders_by_frequency():
    layer = StringLookup()
    layer.adapt(['a', 'b', 'b', 'c', 'c', 'c'])
    assert layer.get_vocabulary() == ['', '[UNK]', 'c', 'b', 'a']
    assert layer.get_vocabulary(include_special_tokens=False) == \
        ['c', 'b', 'a']
    assert layer.vocabulary_size() == 5
    np.testing.assert_array_equal(layer(['c', 'a', 'zzz', '']), [2, 4, 1, 0])


def test_ties_broken_by_value():
    layer = StringLookup()
    layer.adapt(['d', 'b', 'c', 'a'])
    assert layer.get_vocabulary(include_special_tokens=False) == \
        ['a', 'b', 'c', 'd']


def test_adapt_replaces_previous_state():
    layer = StringLookup()
    layer.adapt(['a', 'a'])
    layer.adapt(['b'])
    assert layer.get_vocabulary() == ['', '[UNK]', 'b']


def test_adapt_in_batches_matches_single_pass():
    data = ['x', 'y', 'y', 'z', 'z', 'z', 'w']
    whole = StringLookup().adapt(data)
    batched = StringLookup().adapt(data, batch_size=2)
    assert whole.get_vocabulary() == batched.get_vocabulary()


def test_max_tokens_truncates_vocabulary():
    layer = StringLookup(max_tokens=3)
    layer.adapt(['a', 'a', 'b'])
    assert layer.get_vocabulary() == ['', '[UNK]', 'a']


def test_bytes_inputs_are_decoded():
    layer = StringLookup(vocabulary=['héllo'])
    np.testing.assert_array_equal(layer([b'h\xc3\xa9llo']), [2])


def test_integer_lookup_defaults():
    layer = IntegerLookup()
    layer.adapt([7, 7, 3, 9])
    assert layer.get_vocabulary() == [0, -1, 7, 3, 9]
    np.testing.assert_array_equal(layer([[7, 9], [0, 42]]), [[2, 4], [0, 1]])


def test_integer_lookup_multiple_oov_buckets():
    layer = IntegerLookup(num_oov_indices=2, vocabulary=[7])
    assert layer.get_vocabulary() == [0, -1, -1, 7]
    np.testing.assert_array_equal(layer([7, 4, 5]), [3, 1, 2])


def test_string_lookup_multiple_oov_buckets_are_stable():
    layer = StringLookup(num_oov_indices=3, vocabulary=['a'])
    first = layer(['p', 'q', 'r', 's'])
    second = layer(['p', 'q', 'r', 's'])
    np.testing.assert_array_equal(first, second)
    assert np.all((first >= 1) & (first <= 3))


def test_set_vocabulary_accepts_reserved_prefix():
    layer = StringLookup()
    layer.set_vocabulary(['', '[UNK]', 'x', 'y'])
    assert layer.get_vocabulary() == ['', '[UNK]', 'x', 'y']
    layer.set_vocabulary(['[UNK]', 'x'])
    assert layer.get_vocabulary() == ['', '[UNK]', 'x']


def test_vocabulary_errors():
    with pytest.raises(ValueError):
        StringLookup(vocabulary=['x', '[UNK]'])
    with pytest.raises(ValueError):
        StringLookup(vocabulary=['x', 'y', 'x'])
    with pytest.raises(ValueError):
        StringLookup(max_tokens=3, vocabulary=['a', 'b'])
    with pytest.raises(ValueError):
        StringLookup(max_tokens=2)


def test_num_oov_zero_rejects_unknown_values():
    layer = StringLookup(num_oov_indices=0, vocabulary=['a'])
    np.testing.assert_array_equal(layer(['a', '']), [1, 0])
    with pytest.raises(ValueError):
        layer(['b'])


def test_use_before_adapt_raises():
    with pytest.raises(RuntimeError):
        StringLookup()(['a'])


def test_non_string_input_rejected():
    layer = StringLookup(vocabulary=['a'])
    with pytest.raises(ValueError):
        layer([1])


def test_multi_hot_drops_mask():
    layer = StringLookup(vocabulary=['a', 'b', 'c'], output_mode='multi_hot')
    assert layer.get_vocabulary() == ['[UNK]', 'a', 'b', 'c']
    out = layer([['a', 'b'], ['c', '']])
    np.testing.assert_array_equal(out, [[0, 1, 1, 0], [0, 0, 0, 1]])


def test_one_hot_and_count():
    one_hot = StringLookup(vocabulary=['a', 'b'], output_mode='one_hot')
    np.testing.assert_array_equal(one_hot(['a', 'zzz']),
                                  [[0, 1, 0], [1, 0, 0]])
    count = IntegerLookup(vocabulary=[10, 20], output_mode='count')
    np.testing.assert_array_equal(count([[10, 10, 20, 5]]), [[1, 2, 1]])


def test_pad_to_max_tokens():
    layer = StringLookup(vocabulary=['a'], output_mode='multi_hot',
                         max_tokens=5, pad_to_max_tokens=True)
    assert layer([['a']]).shape == (1, 5)


def test_tf_idf_adapt():
    layer = StringLookup(output_mode='tf_idf')
    layer.adapt([['a', 'a', 'b'], ['b', 'c', 'c']])
    assert layer.get_vocabulary() == ['[UNK]', 'a', 'b', 'c']
    idf = layer.idf_weights
    np.testing.assert_allclose(idf, [np.log(2.0), np.log(1.0 + 2.0 / 3.0),
                                     np.log(2.0)])
    out = layer([['a', 'a', 'zzz']])
    np.testing.assert_allclose(out[0], [np.mean(idf), 2 * np.log(2.0), 0, 0],
                               rtol=1e-6)


def test_tf_idf_requires_weights_for_fixed_vocabulary():
    with pytest.raises(ValueError):
        StringLookup(output_mode='tf_idf', vocabulary=['a'])
    layer = StringLookup(output_mode='tf_idf', vocabulary=['a', 'b'],
                         idf_weights=[0.5, 0.25])
    np.testing.assert_allclose(layer([['b', 'b']])[0], [0, 0, 0.5])


def test_invert():
    layer = StringLookup(vocabulary=['a', 'b'], invert=True)
    out = layer([[2, 3, 1, 0]])
    assert out.tolist() == [['a', 'b', '[UNK]', '']]
    with pytest.raises(ValueError):
        StringLookup(invert=True, output_mode='multi_hot')


def test_vocabulary_file(tmp_path):
    path = tmp_path / 'vocab.txt'
    path.write_text('earth\nwind\nfire\n', encoding='utf-8')
    layer = StringLookup(vocabulary=str(path))
    assert layer.get_vocabulary() == ['', '[UNK]', 'earth', 'wind', 'fire']
    with pytest.raises(ValueError):
        StringLookup(vocabulary=str(tmp_path / 'missing.txt'))


def test_config_round_trip():
    layer = IntegerLookup(vocabulary=[4, 8], num_oov_indices=2)
    clone = IntegerLookup.from_config(layer.get_config())
    assert clone.get_vocabulary() == layer.get_vocabulary()
    np.testing.assert_array_equal(clone([8, 4]), layer([8, 4]))


def test_save_vocabulary_round_trip(tmp_path):
    from kerasport.utils import vocab_io
    layer = StringLookup()
    layer.adapt(['b', 'a', 'b'])
    path = tmp_path / 'saved.txt'
    vocab_io.save_vocabulary(layer.get_vocabulary(), path)
    restored = StringLookup(vocabulary=str(path))
    assert restored.get_vocabulary() == layer.get_vocabulary()

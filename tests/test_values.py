# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for value copying and same-value comparison."""

import math

import pytest

from genro_jsonstore import MISSING, InvalidValueError
from genro_jsonstore.values import clone_value, dump_value, is_container, same_value


class TestCloneValue:
    """Tests for clone_value."""

    @pytest.mark.parametrize('value', [None, True, 0, 1.5, 'text'])
    def test_scalars_pass_through(self, value):
        """Test scalars are returned as they are."""
        assert clone_value(value) is value

    def test_nested_copy_shares_nothing(self):
        """Test containers are copied recursively."""
        original = {'a': [1, {'b': 2}]}
        copy = clone_value(original)
        assert copy == original
        copy['a'][1]['b'] = 99
        assert original['a'][1]['b'] == 2

    def test_tuple_becomes_list(self):
        """Test tuples are stored as arrays."""
        assert clone_value({'t': (1, 2)}) == {'t': [1, 2]}

    def test_rejects_unsupported_type(self):
        """Test non JSON-like values are rejected."""
        with pytest.raises(InvalidValueError, match="unsupported value type set"):
            clone_value({'s': {1, 2}})

    def test_rejects_non_string_key(self):
        """Test object keys must be strings."""
        with pytest.raises(InvalidValueError, match="keys must be str"):
            clone_value({1: 'x'})

    def test_invalid_value_is_type_error(self):
        """Test InvalidValueError can be caught as TypeError."""
        with pytest.raises(TypeError):
            clone_value(object())


class TestSameValue:
    """Tests for same_value."""

    def test_equal_scalars(self):
        """Test equal scalars are the same."""
        assert same_value(1, 1)
        assert same_value('a', 'a')
        assert same_value(None, None)

    def test_int_and_float_are_one_number_type(self):
        """Test 1 and 1.0 are the same number."""
        assert same_value(1, 1.0)

    def test_bool_is_not_number(self):
        """Test True differs from 1 and False from 0."""
        assert not same_value(True, 1)
        assert not same_value(0, False)

    def test_nan_equals_nan(self):
        """Test NaN is the same as NaN."""
        assert same_value(math.nan, float('nan'))
        assert not same_value(math.nan, 1.0)

    def test_signed_zero(self):
        """Test 0.0 and -0.0 differ."""
        assert not same_value(0.0, -0.0)
        assert same_value(-0.0, -0.0)
        assert same_value(0, 0.0)

    def test_null_differs_from_empty(self):
        """Test null is not an empty string or container."""
        assert not same_value(None, '')
        assert not same_value(None, {})
        assert not same_value([], {})

    def test_containers(self):
        """Test structural comparison of containers."""
        assert same_value({'a': [1, 2], 'b': None}, {'b': None, 'a': [1, 2]})
        assert not same_value([1, 2], [2, 1])
        assert not same_value({'a': 1}, {'a': 1, 'b': 2})
        assert not same_value({'a': True}, {'a': 1})


class TestMiscHelpers:
    """Tests for the remaining helpers."""

    def test_is_container(self):
        """Test only dicts and lists are containers."""
        assert is_container({})
        assert is_container([])
        assert not is_container('abc')
        assert not is_container(None)

    def test_dump_value(self):
        """Test debug dump is indented JSON."""
        assert dump_value({'a': [1]}) == '{\n  "a": [\n    1\n  ]\n}'

    def test_missing_sentinel(self):
        """Test MISSING is falsy and has a readable repr."""
        assert not MISSING
        assert repr(MISSING) == '<missing>'

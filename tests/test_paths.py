# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for path splitting and resolution."""

import pytest

from genro_jsonstore import (
    InvalidPathError,
    KeyNotFoundError,
    MissingSegmentError,
    NotAnObjectError,
)
from genro_jsonstore.paths import (
    has_key,
    insert_key,
    read_key,
    remove_key,
    resolve_parent,
    split_path,
    write_key,
)


class TestSplitPath:
    """Tests for split_path."""

    def test_single_segment(self):
        """Test a path without dots."""
        assert split_path('a') == ['a']

    def test_dotted_path(self):
        """Test a dotted path is split on dots."""
        assert split_path('a.b.c') == ['a', 'b', 'c']

    @pytest.mark.parametrize('path', ['', None, 42, ['a']])
    def test_invalid_path(self, path):
        """Test empty and non-string paths are rejected."""
        with pytest.raises(InvalidPathError):
            split_path(path)

    @pytest.mark.parametrize('path', ['a..b', '.a', 'a.', '.'])
    def test_empty_segment(self, path):
        """Test paths with empty segments are rejected."""
        with pytest.raises(InvalidPathError, match="empty segment"):
            split_path(path)


class TestResolveParent:
    """Tests for resolve_parent."""

    def test_top_level_key(self):
        """Test a single segment resolves to the root."""
        root = {'a': 1}
        parent, key = resolve_parent(root, 'a')
        assert parent is root
        assert key == 'a'

    def test_nested_key(self):
        """Test walking down existing objects."""
        root = {'a': {'b': {'c': 1}}}
        parent, key = resolve_parent(root, 'a.b.c')
        assert parent is root['a']['b']
        assert key == 'c'

    def test_final_key_need_not_exist(self):
        """Test the final segment is returned even if absent."""
        root = {'a': {}}
        parent, key = resolve_parent(root, 'a.missing')
        assert parent == {}
        assert key == 'missing'

    def test_missing_segment_raises(self):
        """Test a missing intermediate segment without autocreate."""
        with pytest.raises(MissingSegmentError, match="'b' not found"):
            resolve_parent({'a': {}}, 'a.b.c')

    def test_missing_segment_is_key_error(self):
        """Test MissingSegmentError can be caught as KeyError."""
        with pytest.raises(KeyError):
            resolve_parent({}, 'x.y')

    def test_create_missing(self):
        """Test missing intermediate objects are created."""
        root = {'a': 1}
        parent, key = resolve_parent(root, 'b.c.d', create_missing=True)
        assert root == {'a': 1, 'b': {'c': {}}}
        assert parent is root['b']['c']
        assert key == 'd'

    def test_create_missing_never_creates_final_key(self):
        """Test only intermediates are created."""
        root = {}
        resolve_parent(root, 'a', create_missing=True)
        assert root == {}

    def test_scalar_intermediate_raises(self):
        """Test descending into a scalar fails."""
        with pytest.raises(NotAnObjectError, match="'a' is not an object"):
            resolve_parent({'a': 1}, 'a.b', create_missing=True)

    def test_null_intermediate_raises(self):
        """Test descending into null fails."""
        with pytest.raises(NotAnObjectError):
            resolve_parent({'a': None}, 'a.b')

    def test_failure_leaves_document_unchanged(self):
        """Test a failing walk creates nothing."""
        root = {'a': {'b': 'leaf'}}
        with pytest.raises(NotAnObjectError):
            resolve_parent(root, 'a.b.c.d', create_missing=True)
        assert root == {'a': {'b': 'leaf'}}

    def test_array_index_segment(self):
        """Test array elements are addressed by index."""
        root = {'items': [{'name': 'x'}, {'name': 'y'}]}
        parent, key = resolve_parent(root, 'items.1.name')
        assert parent is root['items'][1]
        assert key == 'name'

    def test_array_root(self):
        """Test a list root."""
        root = [{'a': 1}]
        parent, key = resolve_parent(root, '0.a')
        assert parent is root[0]

    def test_non_canonical_index_segment(self):
        """Test an intermediate index with leading zeros is not found."""
        root = {'items': [{}, {}]}
        with pytest.raises(MissingSegmentError, match="'01' not found"):
            resolve_parent(root, 'items.01.x')
        with pytest.raises(MissingSegmentError, match="inside an array"):
            resolve_parent(root, 'items.01.x', create_missing=True)
        assert root == {'items': [{}, {}]}

    def test_array_missing_index_not_created(self):
        """Test intermediates are never created inside arrays."""
        root = {'items': []}
        with pytest.raises(MissingSegmentError, match="inside an array"):
            resolve_parent(root, 'items.0.name', create_missing=True)
        assert root == {'items': []}


class TestContainerHelpers:
    """Tests for the object/array key helpers."""

    def test_has_key(self):
        """Test key existence in objects and arrays."""
        assert has_key({'a': 1}, 'a')
        assert not has_key({'a': 1}, 'b')
        assert has_key([1, 2], '1')
        assert not has_key([1, 2], '2')
        assert not has_key([1, 2], 'x')
        assert not has_key([1, 2], '-1')

    def test_non_canonical_index(self):
        """Test indexes with leading zeros do not address array elements."""
        items = [1, 2]
        assert has_key(items, '0')
        assert not has_key(items, '01')
        assert not has_key(items, '00')
        with pytest.raises(KeyNotFoundError, match="not a valid position"):
            write_key(items, '01', 'x')
        with pytest.raises(KeyNotFoundError, match="not a valid position"):
            insert_key(items, '02', 'x')
        assert items == [1, 2]

    def test_read_key(self):
        """Test reading from objects and arrays."""
        assert read_key({'a': 1}, 'a') == 1
        assert read_key([10, 20], '1') == 20
        with pytest.raises(KeyNotFoundError, match="'z' does not exist"):
            read_key({}, 'z')

    def test_write_key_array(self):
        """Test array writes replace or append."""
        items = [1, 2]
        write_key(items, '0', 'x')
        write_key(items, '2', 'y')
        assert items == ['x', 2, 'y']
        with pytest.raises(KeyNotFoundError, match="not a valid position"):
            write_key(items, '5', 'z')

    def test_remove_and_insert_array(self):
        """Test removing shifts and inserting restores order."""
        items = ['a', 'b', 'c']
        assert remove_key(items, '1') == 'b'
        assert items == ['a', 'c']
        insert_key(items, '1', 'b')
        assert items == ['a', 'b', 'c']

    def test_remove_missing_raises(self):
        """Test removing an absent key."""
        with pytest.raises(KeyNotFoundError):
            remove_key({'a': 1}, 'b')

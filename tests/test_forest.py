"""Tests for hierarchy.forest."""

from __future__ import annotations

import pytest

from hierarchy.forest import ArrayHierarchy, Hierarchy, HierarchyError


class ListHierarchy(Hierarchy):
    """Minimal alternative implementation for equality checks."""

    def __init__(self, records: list[tuple[int, int]]) -> None:
        self._records = records

    def size(self) -> int:
        return len(self._records)

    def node_id(self, index: int) -> int:
        return self._records[index][0]

    def depth(self, index: int) -> int:
        return self._records[index][1]


class TestArrayHierarchy:
    def test_accessors(self) -> None:
        h = ArrayHierarchy([10, 20, 30], [0, 1, 0])
        assert h.size() == 3
        assert len(h) == 3
        assert h.node_id(1) == 20
        assert h.depth(1) == 1

    def test_records(self) -> None:
        h = ArrayHierarchy([10, 20, 30], [0, 1, 0])
        assert list(h.records()) == [(10, 0), (20, 1), (30, 0)]
        assert list(h) == [(10, 0), (20, 1), (30, 0)]

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(HierarchyError, match="differ in length"):
            ArrayHierarchy([1, 2], [0])

    def test_copies_input(self) -> None:
        ids = [1, 2]
        depths = [0, 1]
        h = ArrayHierarchy(ids, depths)
        ids[0] = 99
        depths[1] = 5
        assert h.format_string() == "[1:0, 2:1]"

    def test_from_records(self) -> None:
        h = ArrayHierarchy.from_records([(1, 0), (2, 1)])
        assert h.node_ids == (1, 2)
        assert h.depths == (0, 1)

    def test_empty(self) -> None:
        h = ArrayHierarchy.empty()
        assert h.size() == 0
        assert list(h.records()) == []


class TestIndexRange:
    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_node_id_out_of_range(self, index: int) -> None:
        h = ArrayHierarchy([1, 2, 3], [0, 1, 1])
        with pytest.raises(IndexError, match="out of range"):
            h.node_id(index)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_depth_out_of_range(self, index: int) -> None:
        h = ArrayHierarchy([1, 2, 3], [0, 1, 1])
        with pytest.raises(IndexError):
            h.depth(index)

    def test_empty_has_no_valid_index(self) -> None:
        with pytest.raises(IndexError):
            ArrayHierarchy.empty().node_id(0)


class TestFormatString:
    def test_format(self) -> None:
        h = ArrayHierarchy([1, 2, 5], [0, 1, 1])
        assert h.format_string() == "[1:0, 2:1, 5:1]"

    def test_empty(self) -> None:
        assert ArrayHierarchy.empty().format_string() == "[]"

    def test_repr(self) -> None:
        assert repr(ArrayHierarchy([1], [0])) == "ArrayHierarchy([1:0])"


class TestEquality:
    def test_equal_by_content(self) -> None:
        assert ArrayHierarchy([1, 2], [0, 1]) == ArrayHierarchy((1, 2), (0, 1))

    def test_different_depths(self) -> None:
        assert ArrayHierarchy([1, 2], [0, 1]) != ArrayHierarchy([1, 2], [0, 0])

    def test_across_implementations(self) -> None:
        assert ArrayHierarchy([1, 2], [0, 1]) == ListHierarchy([(1, 0), (2, 1)])

    def test_not_equal_to_other_types(self) -> None:
        assert ArrayHierarchy([1], [0]) != [(1, 0)]

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(ArrayHierarchy([1], [0]))

    def test_default_format_string_on_subclass(self) -> None:
        assert ListHierarchy([(3, 0), (4, 1)]).format_string() == "[3:0, 4:1]"

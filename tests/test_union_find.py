"""
DisjointSet 單元測試
"""

import pytest

from src.utils.union_find import DisjointSet, OutOfRangeError


class TestDisjointSetInit:
    """初始化測試"""

    @pytest.mark.unit
    @pytest.mark.parametrize("n", [0, 1, 7, 100])
    def test_every_element_is_singleton(self, n: int) -> None:
        ds = DisjointSet(n)
        assert ds.num_sets() == n
        assert ds.size() == n
        assert len(ds) == n
        for i in range(n):
            assert ds.find(i) == i
            assert ds.get_set_size(i) == 1
            assert ds.is_root(i)

    @pytest.mark.unit
    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            DisjointSet(-1)


class TestDisjointSetUnion:
    """union() 測試"""

    @pytest.mark.unit
    def test_union_different_sets(self) -> None:
        """合併不同集合"""
        ds = DisjointSet(10)
        ds.union(0, 1)
        ds.union(2, 3)
        ds.union(2, 4)
        before_sets = ds.num_sets()
        size_p = ds.get_set_size(1)
        size_q = ds.get_set_size(4)

        assert ds.union(1, 4) is True
        assert ds.num_sets() == before_sets - 1
        assert ds.connected(1, 4)
        assert ds.get_set_size(1) == size_p + size_q
        assert ds.get_set_size(4) == size_p + size_q

    @pytest.mark.unit
    def test_union_already_connected(self) -> None:
        """重複合併不改變狀態"""
        ds = DisjointSet(6)
        ds.union(0, 1)
        ds.union(1, 2)
        sets = ds.num_sets()
        sizes = [ds.get_set_size(i) for i in range(6)]
        roots = [ds.find(i) for i in range(6)]

        assert ds.union(0, 2) is False
        assert ds.union(2, 0) is False
        assert ds.num_sets() == sets
        assert [ds.get_set_size(i) for i in range(6)] == sizes
        assert [ds.find(i) for i in range(6)] == roots

    @pytest.mark.unit
    def test_self_union(self) -> None:
        ds = DisjointSet(3)
        assert ds.union(1, 1) is False
        assert ds.num_sets() == 3

    @pytest.mark.unit
    def test_larger_set_survives(self) -> None:
        """大小 5 與大小 2 合併，大小 5 的根保留"""
        ds = DisjointSet(10)
        for i in range(1, 5):
            ds.union(0, i)
        ds.union(5, 6)
        big_root = ds.find(0)
        small_root = ds.find(5)
        assert ds.get_set_size(big_root) == 5
        assert ds.get_set_size(small_root) == 2

        ds.union(small_root, big_root)
        assert ds.find(5) == big_root
        assert ds.is_root(big_root)
        assert not ds.is_root(small_root)
        assert ds.get_set_size(6) == 7

    @pytest.mark.unit
    def test_tie_favors_first_argument(self) -> None:
        """大小相同時保留 p 的根"""
        ds = DisjointSet(4)
        ds.union(3, 2)
        assert ds.find(2) == 3

        ds2 = DisjointSet(4)
        ds2.union(0, 1)
        ds2.union(2, 3)
        ds2.union(2, 0)
        assert ds2.find(0) == 2


class TestDisjointSetFind:
    """find() 測試"""

    @pytest.mark.unit
    def test_find_idempotent(self) -> None:
        ds = DisjointSet(20)
        for i in range(0, 18, 2):
            ds.union(i, i + 2)
        for x in range(20):
            assert ds.find(ds.find(x)) == ds.find(x)

    @pytest.mark.unit
    def test_path_compression_points_to_root(self) -> None:
        """路徑上的節點直接指向根"""
        ds = DisjointSet(4)
        # 建出鏈 3 -> 2 -> 0 (0 為根)
        ds.union(0, 1)
        ds.union(2, 3)
        ds.union(0, 2)
        assert ds._parent[3] == 2

        root = ds.find(3)
        assert root == 0
        assert ds._parent[3] == 0
        assert ds.get_set_size(3) == 4

    @pytest.mark.unit
    def test_roots(self) -> None:
        ds = DisjointSet(5)
        ds.union(0, 4)
        ds.union(1, 2)
        assert list(ds.roots()) == [0, 1, 3]


class TestDisjointSetRange:
    """索引範圍測試"""

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", [-1, 5, 100])
    def test_find_out_of_range(self, bad: int) -> None:
        ds = DisjointSet(5)
        with pytest.raises(OutOfRangeError):
            ds.find(bad)

    @pytest.mark.unit
    @pytest.mark.parametrize(("p", "q"), [(-1, 0), (0, 5), (7, 8)])
    def test_union_out_of_range_does_not_mutate(self, p: int, q: int) -> None:
        ds = DisjointSet(5)
        with pytest.raises(OutOfRangeError):
            ds.union(p, q)
        assert ds.num_sets() == 5
        assert all(ds.is_root(i) for i in range(5))

    @pytest.mark.unit
    def test_out_of_range_is_index_error(self) -> None:
        with pytest.raises(IndexError):
            DisjointSet(0).find(0)


class TestDisjointSetScale:
    """大量元素測試"""

    @pytest.mark.unit
    def test_sequential_unions_on_image_sized_set(self) -> None:
        n = 512 * 512
        ds = DisjointSet(n)
        for i in range(1000):
            assert ds.union(i, i + 1) is True
        assert ds.num_sets() == n - 1000
        assert ds.get_set_size(1000) == 1001
        assert ds.connected(0, 1000)

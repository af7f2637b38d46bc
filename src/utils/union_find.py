"""
Union-Find (並查集) 資料結構

用於高效處理像素連通分量問題
"""

from array import array
from collections.abc import Iterator


class OutOfRangeError(IndexError):
    """元素索引超出範圍"""


class DisjointSet:
    """
    陣列式 Union-Find 資料結構

    支援完整路徑壓縮和按大小合併 (union-by-size)

    每個元素以整數 ID (0..n-1) 表示，`_parent` 儲存：
    - 非負值：父節點 ID
    - 負值：此元素為根節點，絕對值為集合大小

    例如 `_parent[5] == -10` 代表元素 5 是根，其集合有 10 個元素
    """

    __slots__ = ("_parent", "_num_sets")

    def __init__(self, n: int) -> None:
        """
        初始化 Union-Find，每個元素自成一個集合

        Args:
            n: 元素數量 (0..n-1)

        Raises:
            ValueError: n 為負數
        """
        if n < 0:
            raise ValueError(f"元素數量不可為負數: {n}")
        self._parent: array[int] = array("l", [-1]) * n
        self._num_sets = n

    def __len__(self) -> int:
        return len(self._parent)

    def _check(self, id_: int) -> None:
        if id_ < 0 or id_ >= len(self._parent):
            raise OutOfRangeError(f"Invalid element id: {id_}")

    def find(self, id_: int) -> int:
        """
        尋找元素的根節點 (帶完整路徑壓縮)

        Args:
            id_: 元素索引

        Returns:
            根節點索引

        Raises:
            OutOfRangeError: 索引不在 [0, n) 範圍內
        """
        self._check(id_)
        parent = self._parent

        root = id_
        while parent[root] >= 0:
            root = parent[root]

        # 路徑壓縮：路徑上所有節點直接指向根
        while id_ != root:
            nxt = parent[id_]
            parent[id_] = root
            id_ = nxt

        return root

    def union(self, p: int, q: int) -> bool:
        """
        合併兩個元素所在的集合

        大小相同時保留 p 的根

        Args:
            p: 第一個元素索引
            q: 第二個元素索引

        Returns:
            是否發生合併 (已在同一集合則為 False)

        Raises:
            OutOfRangeError: 任一索引不在 [0, n) 範圍內
        """
        self._check(p)
        self._check(q)

        root_p = self.find(p)
        root_q = self.find(q)
        if root_p == root_q:
            return False

        parent = self._parent
        size_p = -parent[root_p]
        size_q = -parent[root_q]

        # 按大小合併：較小的樹接到較大的樹下
        if size_p >= size_q:
            parent[root_q] = root_p
            parent[root_p] = -(size_p + size_q)
        else:
            parent[root_p] = root_q
            parent[root_q] = -(size_p + size_q)

        self._num_sets -= 1
        return True

    def connected(self, p: int, q: int) -> bool:
        """檢查兩個元素是否在同一集合"""
        return self.find(p) == self.find(q)

    def get_set_size(self, id_: int) -> int:
        """取得元素所在集合的大小"""
        return -self._parent[self.find(id_)]

    def is_root(self, id_: int) -> bool:
        """檢查元素是否為集合的根"""
        self._check(id_)
        return self._parent[id_] < 0

    def num_sets(self) -> int:
        """剩餘的不相交集合數量"""
        return self._num_sets

    def size(self) -> int:
        """元素總數"""
        return len(self._parent)

    def roots(self) -> Iterator[int]:
        """依 ID 遞增順序列出所有根節點"""
        for id_, value in enumerate(self._parent):
            if value < 0:
                yield id_

# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Disjoint-set forest over provisional wire ids.

Negative ids stand for "no wire" and pass through every operation
untouched, so callers can feed raw wire-map values straight in.
"""

from typing import List

ROOT = -1


class UnionFind:
    """Union-find with path compression.

    ``parent[i] == ROOT`` marks ``i`` as the representative of its
    partition. Ids that were never merged are singleton partitions.
    """

    def __init__(self, size: int):
        self.parent: List[int] = [ROOT] * size

    def __len__(self) -> int:
        return len(self.parent)

    def find(self, i: int) -> int:
        if i < 0:
            return ROOT

        root = i
        while self.parent[root] != ROOT:
            root = self.parent[root]

        # compress
        while i != root:
            nxt = self.parent[i]
            self.parent[i] = root
            i = nxt
        return root

    def merge(self, a: int, b: int) -> bool:
        """Join the partitions of ``a`` and ``b``; ``a``'s root goes under ``b``'s.

        Returns:
            True if two distinct partitions were joined.
        """
        if a < 0 or b < 0:
            return False

        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        self.parent[root_a] = root_b
        return True

    def is_root(self, i: int) -> bool:
        if i < 0:
            return False
        return self.find(i) == i

"""Merkle tree construction and inclusion proof generation."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

from .hashutils import Algorithm
from .proof import Proof, lemma_for_hash, lemma_for_index
from .tree import Empty, Leaf, Node, Tree, iter_leaves, new_leaf

T = TypeVar("T")


def _tree_key(tree: Tree) -> tuple:
    if isinstance(tree, Empty):
        return (0, tree.hash)
    if isinstance(tree, Leaf):
        return (1, tree.hash, tree.value)
    return (2, tree.hash, _tree_key(tree.left), _tree_key(tree.right))


@functools.total_ordering
@dataclass(frozen=True)
class MerkleTree(Generic[T]):
    """A binary tree with values at the leaves.

    Every inner node holds the hash of the concatenation of its children's
    hashes.
    """

    algorithm: Algorithm
    root: Tree
    _height: int
    _count: int

    @classmethod
    def from_values(cls, algorithm: Algorithm, values: Iterable[T]) -> MerkleTree[T]:
        """Build a tree from ``values``; no values gives the empty tree."""
        level: list[Tree] = [new_leaf(algorithm, value) for value in values]
        if not level:
            return cls(algorithm, Empty(algorithm.hash_empty()), 0, 0)

        count = len(level)
        height = 0
        while len(level) > 1:
            pairs = zip(level[0::2], level[1::2])
            next_level: list[Tree] = [
                Node(algorithm.hash_nodes(left.hash, right.hash), left, right)
                for left, right in pairs
            ]
            if len(level) % 2:
                next_level.append(level[-1])
            level = next_level
            height += 1

        return cls(algorithm, level[0], height, count)

    @property
    def root_hash(self) -> bytes:
        """The hash at the root of the tree."""
        return self.root.hash

    @property
    def height(self) -> int:
        """The number of levels above the leaves."""
        return self._height

    @property
    def count(self) -> int:
        """The number of leaves."""
        return self._count

    @property
    def is_empty(self) -> bool:
        """Whether the tree holds no leaves."""
        return self._count == 0

    def gen_proof(self, value: T) -> Optional[Proof[T]]:
        """Proof that ``value`` is in the tree, or None if it is not."""
        lemma = lemma_for_hash(self.root, self.algorithm.hash_leaf(value))
        if lemma is None:
            return None
        return Proof(self.algorithm, self.root_hash, lemma, value)

    def gen_nth_proof(self, n: int) -> Optional[Proof[T]]:
        """Proof for the ``n``-th leaf, or None if ``n`` is out of range."""
        found = lemma_for_index(self.root, n, self._count)
        if found is None:
            return None
        lemma, value = found
        return Proof(self.algorithm, self.root_hash, lemma, value)

    def __iter__(self) -> Iterator[T]:
        return iter_leaves(self.root)

    def __len__(self) -> int:
        return self._count

    def _key(self) -> tuple:
        return (self._height, self._count, self.algorithm.name, _tree_key(self.root))

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._key() < other._key()
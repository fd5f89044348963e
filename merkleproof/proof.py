"""Inclusion proofs: lemmas that chain a leaf hash up to a root hash."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from .hashutils import Algorithm, algorithm_from_name
from .tree import Empty, Leaf, Node, Tree

T = TypeVar("T")


class Side(enum.IntEnum):
    """The branch of a node a sibling hash was found in."""

    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True, order=True)
class Positioned:
    """A hash tagged with the branch it belongs to."""

    side: Side
    value: bytes


def _option_key(key: Optional[tuple]) -> tuple:
    return (0,) if key is None else (1, key)


@functools.total_ordering
@dataclass(frozen=True)
class Lemma:
    """The hash of a node, the hash of its sibling and the lemma below it.

    When the sub lemma's ``node_hash`` is combined with ``sibling_hash``
    the result must equal this ``node_hash``.
    """

    node_hash: bytes
    sibling_hash: Optional[Positioned] = None
    sub_lemma: Optional[Lemma] = None

    def _key(self) -> tuple:
        sibling = None
        if self.sibling_hash is not None:
            sibling = (self.sibling_hash.side, self.sibling_hash.value)
        sub = None if self.sub_lemma is None else self.sub_lemma._key()
        return (self.node_hash, _option_key(sibling), _option_key(sub))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Lemma):
            return NotImplemented
        return self._key() < other._key()

    def index(self, count: int) -> int:
        """Return the index of this lemma's value in a tree of ``count`` leaves.

        Raises ValueError if the lemma is malformed.
        """
        index = 0
        lemma = self
        while True:
            sub, sibling = lemma.sub_lemma, lemma.sibling_hash
            if sub is None and sibling is None:
                return index
            if sub is None or sibling is None:
                raise ValueError("malformed lemma")
            left_count = _next_power_of_two(count) // 2
            if sibling.side is Side.LEFT:
                index += left_count
                count -= left_count
            else:
                count = left_count
            lemma = sub

    def validate(self, algorithm: Algorithm) -> bool:
        """Check that every step of the lemma hashes up correctly."""
        lemma = self
        while True:
            sub, sibling = lemma.sub_lemma, lemma.sibling_hash
            if sub is None:
                return sibling is None
            if sibling is None:
                return False
            if sibling.side is Side.LEFT:
                combined = algorithm.hash_nodes(sibling.value, sub.node_hash)
            else:
                combined = algorithm.hash_nodes(sub.node_hash, sibling.value)
            if combined != lemma.node_hash:
                return False
            lemma = sub


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def lemma_for_hash(tree: Tree, needle: bytes) -> Optional[Lemma]:
    """Build a lemma proving that a leaf with hash ``needle`` is in ``tree``.

    Returns None if no such leaf exists.
    """
    needle = bytes(needle)
    if isinstance(tree, Empty):
        return None
    if isinstance(tree, Leaf):
        return Lemma(tree.hash) if tree.hash == needle else None
    sub = lemma_for_hash(tree.left, needle)
    if sub is not None:
        sibling = Positioned(Side.RIGHT, tree.right.hash)
    else:
        sub = lemma_for_hash(tree.right, needle)
        if sub is None:
            return None
        sibling = Positioned(Side.LEFT, tree.left.hash)
    return Lemma(tree.hash, sibling, sub)


def lemma_for_index(tree: Tree, idx: int, count: int) -> Optional[tuple[Lemma, Any]]:
    """Build a lemma for the ``idx``-th leaf of a tree of ``count`` leaves.

    Returns the lemma and the leaf's value, or None if ``idx`` is out of
    range or ``count`` does not match the tree's shape.
    """
    if idx >= count or idx < 0:
        return None
    if isinstance(tree, Empty):
        return None
    if isinstance(tree, Leaf):
        if count != 1:
            return None
        return Lemma(tree.hash), tree.value
    if not isinstance(tree, Node):
        raise TypeError(f"not a tree: {type(tree).__name__}")
    left_count = _next_power_of_two(count) // 2
    if idx < left_count:
        found = lemma_for_index(tree.left, idx, left_count)
        sibling = Positioned(Side.RIGHT, tree.right.hash)
    else:
        found = lemma_for_index(tree.right, idx - left_count, count - left_count)
        sibling = Positioned(Side.LEFT, tree.left.hash)
    if found is None:
        return None
    sub, value = found
    return Lemma(tree.hash, sibling, sub), value


def _lemma_to_dict(lemma: Lemma) -> dict:
    sibling = None
    if lemma.sibling_hash is not None:
        sibling = {lemma.sibling_hash.side.name.title(): lemma.sibling_hash.value.hex()}
    return {
        "node_hash": lemma.node_hash.hex(),
        "sibling_hash": sibling,
        "sub_lemma": None if lemma.sub_lemma is None else _lemma_to_dict(lemma.sub_lemma),
    }


def _lemma_from_dict(data: Any) -> Lemma:
    try:
        node_hash = bytes.fromhex(data["node_hash"])
        raw_sibling = data["sibling_hash"]
        raw_sub = data["sub_lemma"]
        sibling = None
        if raw_sibling is not None:
            ((side_name, value),) = raw_sibling.items()
            sibling = Positioned(Side[side_name.upper()], bytes.fromhex(value))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"malformed lemma: {exc}") from None
    sub = None if raw_sub is None else _lemma_from_dict(raw_sub)
    return Lemma(node_hash, sibling, sub)


@functools.total_ordering
@dataclass(frozen=True)
class Proof(Generic[T]):
    """Evidence that ``value`` is a member of a tree with ``root_hash``."""

    algorithm: Algorithm = field(compare=False)
    root_hash: bytes
    lemma: Lemma
    value: T

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Proof):
            return NotImplemented
        return (self.root_hash, self.value, self.lemma) < (
            other.root_hash,
            other.value,
            other.lemma,
        )

    def validate(self, root_hash: bytes) -> bool:
        """Check the proof is well formed and leads to ``root_hash``."""
        root = bytes(root_hash)
        if self.root_hash != root or self.lemma.node_hash != root:
            return False
        return self.lemma.validate(self.algorithm)

    def index(self, count: int) -> int:
        """Index of the proven value in a tree of ``count`` leaves."""
        return self.lemma.index(count)

    def to_dict(self) -> dict:
        """Represent the proof as plain data; hashes become hex strings."""
        return {
            "algorithm": self.algorithm.name,
            "root_hash": self.root_hash.hex(),
            "lemma": _lemma_to_dict(self.lemma),
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Proof:
        """Rebuild a proof from the output of ``to_dict``."""
        try:
            algorithm = algorithm_from_name(data["algorithm"])
            root_hash = bytes.fromhex(data["root_hash"])
            lemma = _lemma_from_dict(data["lemma"])
            value = data["value"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed proof: {exc}") from None
        return cls(algorithm, root_hash, lemma, value)
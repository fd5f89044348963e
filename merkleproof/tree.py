"""Binary tree whose leaves hold values and whose nodes hold hashes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar, Union

from .hashutils import Algorithm

T = TypeVar("T")


@dataclass(frozen=True)
class Empty:
    """The tree with no leaves; holds the hash of the empty string."""

    hash: bytes


@dataclass(frozen=True)
class Leaf(Generic[T]):
    """A leaf holding a value and its leaf hash."""

    hash: bytes
    value: T


@dataclass(frozen=True)
class Node(Generic[T]):
    """An inner node holding the hash of its two children."""

    hash: bytes
    left: Tree
    right: Tree


Tree = Union[Empty, Leaf[Any], Node[Any]]


def new_leaf(algorithm: Algorithm, value: T) -> Leaf[T]:
    """Create a leaf for ``value``, hashed with ``algorithm``."""
    return Leaf(algorithm.hash_leaf(value), value)


def iter_leaves(tree: Tree) -> Iterator[Any]:
    """Yield the values of the leaves of ``tree``, left to right."""
    stack = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, Node):
            stack.append(current.right)
            stack.append(current.left)
        elif isinstance(current, Leaf):
            yield current.value
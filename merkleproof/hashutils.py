"""Hash algorithms and the hashing rules for leaves and inner nodes."""

from __future__ import annotations

import abc
import hashlib
from dataclasses import dataclass
from typing import Any, Protocol

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


class _Context(Protocol):
    def update(self, data: Any, /) -> None: ...

    def digest(self) -> bytes: ...


class Hashable(abc.ABC):
    """A value that knows how to feed itself to a hash context.

    Bytes-like objects and strings are hashed directly; any other value
    stored in a tree must provide ``update_context``.
    """

    @abc.abstractmethod
    def update_context(self, context: _Context) -> None:
        """Feed the bytes that identify this value to ``context``."""


def update_context(context: _Context, value: Any) -> None:
    """Feed ``value`` to ``context``.

    Objects with an ``update_context`` method feed themselves, strings are
    fed as UTF-8 and anything supporting the buffer protocol is fed as is.
    """
    method = getattr(value, "update_context", None)
    if callable(method):
        method(context)
        return
    if isinstance(value, str):
        context.update(value.encode("utf-8"))
        return
    try:
        data = memoryview(value)
    except TypeError:
        raise TypeError(f"cannot hash value of type {type(value).__name__}") from None
    context.update(data)


@dataclass(frozen=True)
class Algorithm:
    """A digest algorithm, identified by its name."""

    name: str
    hashlib_name: str

    def __repr__(self) -> str:
        return self.name

    def new_context(self) -> _Context:
        """Return a fresh hash context for this algorithm."""
        return hashlib.new(self.hashlib_name)

    def hash_empty(self) -> bytes:
        """Digest of the empty string."""
        return self.new_context().digest()

    def hash_leaf(self, leaf: Any) -> bytes:
        """Digest of a leaf value, domain-separated with a 0x00 prefix."""
        context = self.new_context()
        context.update(LEAF_PREFIX)
        update_context(context, leaf)
        return context.digest()

    def hash_nodes(self, left: Any, right: Any) -> bytes:
        """Digest of two child hashes, domain-separated with a 0x01 prefix."""
        context = self.new_context()
        context.update(NODE_PREFIX)
        update_context(context, left)
        update_context(context, right)
        return context.digest()


SHA1 = Algorithm("SHA1", "sha1")
SHA256 = Algorithm("SHA256", "sha256")
SHA384 = Algorithm("SHA384", "sha384")
SHA512 = Algorithm("SHA512", "sha512")
SHA512_256 = Algorithm("SHA512_256", "sha512_256")

_BY_NAME = {alg.name: alg for alg in (SHA1, SHA256, SHA384, SHA512, SHA512_256)}


def algorithm_from_name(name: str) -> Algorithm:
    """Look up a known algorithm by its name, e.g. ``"SHA256"``."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ValueError(f"unknown hash algorithm: {name!r}") from None
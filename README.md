# merkleproof

This package provides a Merkle tree that stores values at its leaves. It
can produce inclusion proofs for those values and check them.

The hashes are computed as follows:

- Each leaf hash is `H(0x00 || value)`.
- Each inner node hash is `H(0x01 || left || right)`.
- The root hash of an empty tree is the hash of the empty string.
- When a level has an odd number of nodes, the last node moves up to the next level unchanged.

## Installation

```
pip install merkleproof
```

The package uses only the standard library (`hashlib`).

## Usage

```python
from merkleproof.hashutils import algorithm_from_name
from merkleproof.merkletree import MerkleTree

sha512 = algorithm_from_name("SHA512")
tree = MerkleTree.from_values(sha512, [b"one", b"two", b"three", b"four"])

tree.count         # 4
len(tree)          # 4
tree.height        # 2
tree.is_empty      # False
root = tree.root_hash

proof = tree.gen_proof(b"three")
assert proof is not None and proof.validate(root)

nth = tree.gen_nth_proof(2)
assert nth.value == b"three"
assert nth.index(tree.count) == 2

list(tree)         # [b"one", b"two", b"three", b"four"]
```

`root_hash`, `height`, `count` and `is_empty` are properties, not methods.

`gen_proof` returns `None` if the value is not in the tree. `gen_nth_proof`
returns `None` if the index is out of range.

You can build a tree from an empty iterable. Its `count` and `height` are 0
and its `root_hash` is the hash of the empty string. It yields no proofs.

`MerkleTree` and `Proof` are frozen dataclasses. They compare by value and
can be ordered.

### Proofs and lemmas

The module `merkleproof.proof` defines the following:

- `Proof`. Its fields are `algorithm`, `root_hash`, `lemma` and `value`.
  - `validate(root_hash)` checks that the proof's root hash and its lemma's node hash both equal `root_hash`. It also checks that every step of the lemma hashes up correctly.
  - `index(count)` gives the position of the value in a tree of `count` leaves.
- `Lemma`. Its fields are `node_hash`, `sibling_hash` and `sub_lemma`.
  - `validate(algorithm)` checks the hashes.
  - `index(count)` gives the position of the value. It raises `ValueError` for a malformed lemma.
- `Positioned` and `Side`. These record whether a sibling hash sits on the left or the right.
- `lemma_for_hash(tree, needle)` and `lemma_for_index(tree, idx, count)` are the lower-level builders that `MerkleTree` uses.

### Hash algorithms

`algorithm_from_name` accepts one of `SHA1`, `SHA256`, `SHA384`, `SHA512`
or `SHA512_256`. Any other name raises `ValueError`.

An `Algorithm` has these methods:

- `hash_empty()`
- `hash_leaf(leaf)`
- `hash_nodes(left, right)`
- `new_context()`

### Leaf values

A leaf value can be one of the following:

- Any bytes-like object, such as `bytes`, `bytearray` or `memoryview`.
- A `str`, which is hashed as UTF-8.
- Any object with an `update_context(context)` method. That method must feed the object's bytes to the given hash context. To declare this, subclass `merkleproof.hashutils.Hashable`.

Any other value raises `TypeError` when it is hashed.

### Lower-level tree

`merkleproof.tree` holds the node types `Empty`, `Leaf` and `Node`, along
with two helpers:

- `new_leaf(algorithm, value)`
- `iter_leaves(tree)`, which yields the leaf values from left to right.

### Serialising proofs

`Proof.to_dict()` turns a proof into a dict with these contents:

- The algorithm's name.
- The hashes, as hex strings.
- Each sibling, as `{"Left": ...}` or `{"Right": ...}`.
- The value, unchanged.

The dict can be passed to `json.dumps` only when the value itself is
JSON-serialisable. `Proof.from_dict(data)` rebuilds the proof and raises
`ValueError` on malformed input.

## What it does not do

There is no binary wire format for proofs. The dict form is the only
serialisation provided. There is also no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```
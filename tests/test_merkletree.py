import dataclasses

import pytest

from merkleproof.hashutils import SHA256, SHA512, Hashable
from merkleproof.merkletree import MerkleTree
from merkleproof.proof import Positioned, Proof, Side

DIGEST = SHA512


def byte_values(n):
    return [bytes([x]) for x in range(1, n + 1)]


def test_from_str_vec():
    values = ["one", "two", "three", "four"]
    hashes = [DIGEST.hash_leaf(v.encode()) for v in values]
    tree = MerkleTree.from_values(DIGEST, values)

    h01 = DIGEST.hash_nodes(hashes[0], hashes[1])
    h23 = DIGEST.hash_nodes(hashes[2], hashes[3])
    root_hash = DIGEST.hash_nodes(h01, h23)

    assert tree.count == 4
    assert tree.height == 2
    assert tree.root_hash == root_hash


def test_from_vec_empty():
    tree = MerkleTree.from_values(DIGEST, [])
    assert tree.root_hash == DIGEST.hash_empty()
    assert tree.is_empty
    assert tree.height == 0
    assert len(tree) == 0
    assert list(tree) == []


def test_from_vec1():
    tree = MerkleTree.from_values(DIGEST, ["hello, world"])
    assert tree.count == 1
    assert tree.height == 0
    assert tree.root_hash == DIGEST.hash_leaf(b"hello, world")
    assert not tree.is_empty


def test_from_vec3():
    tree = MerkleTree.from_values(DIGEST, byte_values(3))
    hashes = [DIGEST.hash_leaf(v) for v in byte_values(3)]
    h01 = DIGEST.hash_nodes(hashes[0], hashes[1])
    root_hash = DIGEST.hash_nodes(h01, hashes[2])

    assert tree.count == 3
    assert tree.height == 2
    assert tree.root_hash == root_hash


def test_from_vec9():
    values = byte_values(9)
    tree = MerkleTree.from_values(DIGEST, values)
    h = [DIGEST.hash_leaf(v) for v in values]

    h01 = DIGEST.hash_nodes(h[0], h[1])
    h23 = DIGEST.hash_nodes(h[2], h[3])
    h45 = DIGEST.hash_nodes(h[4], h[5])
    h67 = DIGEST.hash_nodes(h[6], h[7])
    h0123 = DIGEST.hash_nodes(h01, h23)
    h4567 = DIGEST.hash_nodes(h45, h67)
    h1to7 = DIGEST.hash_nodes(h0123, h4567)
    root_hash = DIGEST.hash_nodes(h1to7, h[8])

    assert tree.count == 9
    assert tree.height == 4
    assert tree.root_hash == root_hash


def test_valid_proof():
    values = byte_values(9)
    tree = MerkleTree.from_values(DIGEST, values)
    for value in values:
        proof = tree.gen_proof(value)
        assert proof is not None
        assert proof.validate(tree.root_hash) is True


def test_valid_proof_str():
    tree = MerkleTree.from_values(DIGEST, ["Hello", "my", "name", "is", "Rusty"])
    proof = tree.gen_proof("Rusty")
    assert proof is not None
    assert proof.value == "Rusty"
    assert proof.validate(tree.root_hash) is True


def test_proof_for_missing_value():
    tree = MerkleTree.from_values(DIGEST, byte_values(4))
    assert tree.gen_proof(b"\x09") is None


def test_proof_on_empty_tree():
    tree = MerkleTree.from_values(DIGEST, [])
    assert tree.gen_proof(b"") is None
    assert tree.gen_nth_proof(0) is None


def test_wrong_proof():
    values1 = [b"\x01", b"\x02", b"\x03", b"\x04"]
    tree1 = MerkleTree.from_values(DIGEST, values1)
    tree2 = MerkleTree.from_values(DIGEST, [b"\x04", b"\x05", b"\x06", b"\x07"])

    for value in values1:
        proof = tree1.gen_proof(value)
        is_valid = proof.validate(tree2.root_hash) if proof is not None else False
        assert is_valid is False


@pytest.mark.parametrize("count", [1, 2, 3, 10, 15, 16, 17, 22])
def test_nth_proof(count):
    tree = MerkleTree.from_values(DIGEST, byte_values(count))
    for i in range(count):
        proof = tree.gen_nth_proof(i)
        assert proof is not None
        assert proof.value == bytes([i + 1])
        assert proof.validate(tree.root_hash)
        assert proof.index(tree.count) == i

    assert tree.gen_nth_proof(count) is None
    assert tree.gen_nth_proof(count + 1000) is None


def test_mutate_proof_first_lemma():
    values = byte_values(9)
    tree = MerkleTree.from_values(DIGEST, values)

    for i, value in enumerate(values):
        proof = tree.gen_proof(value)
        lemma = proof.lemma
        if i % 3 == 0:
            lemma = dataclasses.replace(lemma, node_hash=b"\x01\x02\x03")
        elif i % 3 == 1:
            lemma = dataclasses.replace(
                lemma, sibling_hash=Positioned(Side.LEFT, b"\x01\x02\x03")
            )
        else:
            lemma = dataclasses.replace(
                lemma, sibling_hash=Positioned(Side.RIGHT, b"\x01\x02\x03")
            )
        mutated = dataclasses.replace(proof, lemma=lemma)
        assert mutated.validate(tree.root_hash) is False


def test_tree_iter():
    values = byte_values(9)
    tree = MerkleTree.from_values(DIGEST, values)
    assert list(tree) == values


def test_tree_iter_loop():
    values = byte_values(9)
    tree = MerkleTree.from_values(DIGEST, values)
    collected = []
    for value in tree:
        collected.append(value)
    assert collected == values


def test_tree_iter_yields_same_objects():
    values = [bytearray([x]) for x in range(1, 10)]
    tree = MerkleTree.from_values(DIGEST, values)
    assert all(a is b for a, b in zip(tree, values))
    assert len(list(tree)) == 9


def test_len_matches_count():
    tree = MerkleTree.from_values(DIGEST, byte_values(7))
    assert len(tree) == tree.count == 7


class PublicKey(Hashable):
    def __init__(self, zero_values, one_values):
        self.zero_values = zero_values
        self.one_values = one_values

    def to_bytes(self):
        return b"".join(self.zero_values + self.one_values)

    def update_context(self, context):
        context.update(self.to_bytes())


def make_keys():
    return [
        PublicKey(
            [bytes([i]), bytes([i + 1]), bytes([i + 2])],
            [bytes([i + 3]), bytes([i + 4]), bytes([i + 5])],
        )
        for i in range(10)
    ]


def test_custom_hashable_impl():
    tree = MerkleTree.from_values(DIGEST, make_keys())
    assert tree.count == 10
    assert tree.height == 4


def test_custom_hashable_proof():
    keys = make_keys()
    tree = MerkleTree.from_values(DIGEST, keys)
    proof = tree.gen_proof(keys[3])
    assert proof.validate(tree.root_hash)
    assert proof.index(tree.count) == 3


def test_serialize_proof_round_trip():
    tree = MerkleTree.from_values(DIGEST, byte_values(9))
    proof = tree.gen_proof(b"\x05")
    restored = Proof.from_dict(proof.to_dict())
    assert restored == proof
    assert restored.validate(tree.root_hash)


def test_equal_trees():
    a = MerkleTree.from_values(DIGEST, byte_values(5))
    b = MerkleTree.from_values(DIGEST, byte_values(5))
    assert a == b
    assert hash(a) == hash(b)


def test_trees_differ_by_algorithm():
    a = MerkleTree.from_values(SHA256, byte_values(5))
    b = MerkleTree.from_values(SHA512, byte_values(5))
    assert a != b


def test_ordering_by_height_then_count():
    small = MerkleTree.from_values(DIGEST, byte_values(2))
    three = MerkleTree.from_values(DIGEST, byte_values(3))
    four = MerkleTree.from_values(DIGEST, byte_values(4))
    big = MerkleTree.from_values(DIGEST, byte_values(9))
    assert small < three < four < big
    assert sorted([big, four, small, three]) == [small, three, four, big]
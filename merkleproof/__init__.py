"""Merkle tree with generation and validation of inclusion proofs."""

__version__ = "1.11.1"

__all__ = ["hashutils", "tree", "proof", "merkletree"]
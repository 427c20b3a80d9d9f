"""SHAKE hashing, binary tree helpers, vector commitments and VOLE commitments."""

__version__ = "0.1.0"

__all__ = ["shake", "tree", "vc", "vole"]
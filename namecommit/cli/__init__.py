"""
namecommit Command Line Interface.

This package provides command-line tools for hashing identifiers, committing
batches of them to a Merkle root and verifying inclusion proofs.
"""

# Import the main CLI entry point
from .main import cli

# Re-export for easier imports
__all__ = [
    'cli',
]

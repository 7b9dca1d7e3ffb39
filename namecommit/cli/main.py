"""
namecommit Command Line Interface

Provides commands for hashing identifiers, committing batches of them and
verifying inclusion proofs.
"""

import json
import logging
import sys
from typing import List, Optional, TextIO

import click
from pydantic import ValidationError

from namecommit.core.commitment import commit_identifiers
from namecommit.core.digest import Digest
from namecommit.core.errors import NamecommitError
from namecommit.core.merkle import verify as verify_proof
from namecommit.core.models import MerkleProofModel
from namecommit.core.namehash import namehash

# Configure click
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

logger = logging.getLogger(__name__)


# Helper functions
def read_identifiers(stream: TextIO) -> List[str]:
    """Read one identifier per line, skipping empty lines.

    Only the line ending is removed; other whitespace is part of the name.
    """
    names = (line.rstrip("\r\n") for line in stream)
    return [name for name in names if name]


def load_proof(file_path: str) -> MerkleProofModel:
    """Load a proof document from a JSON file."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return MerkleProofModel(**data)
    except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
        click.echo(f"Error loading proof: {e}", err=True)
        sys.exit(1)


def display_name(name: str) -> str:
    """Make a name printable; undecodable characters become U+FFFD."""
    return name.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


def parse_digest(text: str, what: str) -> Digest:
    """Parse a hex digest given on the command line."""
    try:
        return Digest.from_hex(text)
    except ValueError as e:
        click.echo(f"Invalid {what}: {e}", err=True)
        sys.exit(1)


# Command groups
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--log-level', envvar='NAMECOMMIT_LOG_LEVEL', default='WARNING', show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False), help='Logging verbosity')
def cli(log_level: str):
    """namecommit - Merkle commitments for dotted identifiers."""
    logging.basicConfig(level=getattr(logging, log_level.upper()),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')


@cli.command(name='hash')
@click.argument('names', nargs=-1, required=True)
def hash_names(names: List[str]):
    """Print the namehash of each NAME."""
    for name in names:
        click.echo(f"{namehash(name).hex()}  {display_name(name)}")


@cli.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--workers', envvar='NAMECOMMIT_WORKERS', type=click.IntRange(min=1),
              help='Threads used to hash large batches')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True),
              help='Write the commitment to this file instead of stdout')
def commit(input_file: TextIO, workers: Optional[int], output: Optional[str]):
    """Commit identifiers (one per line) to a Merkle root."""
    identifiers = read_identifiers(input_file)
    try:
        commitment = commit_identifiers(identifiers, workers=workers)
    except NamecommitError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info("Committed %d identifiers under root %s", commitment.size, commitment.root.hex())
    document = {
        "root": commitment.root.hex(),
        "size": commitment.size,
        "entries": [record.model_dump(mode='json') for record in commitment.records()],
    }
    text = json.dumps(document, indent=2)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text + "\n")
        except OSError as e:
            click.echo(f"Error saving commitment: {e}", err=True)
            sys.exit(1)
        click.echo(f"Commitment saved to {output}")
    else:
        click.echo(text)


@cli.command()
@click.argument('proof_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--root', help='Expected root (defaults to the root in the proof file)')
@click.option('--name', help='Identifier the proven leaf must hash to')
def verify(proof_file: str, root: Optional[str], name: Optional[str]):
    """Verify an inclusion proof."""
    document = load_proof(proof_file)
    proof = document.to_proof()
    expected_root = parse_digest(root, 'root') if root else document.root_digest

    if name is not None and namehash(name) != proof.leaf:
        click.echo(f"Leaf mismatch: proof is for {proof.leaf.hex()}, {display_name(name)} hashes to {namehash(name).hex()}",
                   err=True)
        sys.exit(1)

    if verify_proof(proof, proof.leaf, expected_root):
        click.echo("✅ Proof is valid")
        sys.exit(0)
    else:
        click.echo("❌ Proof does not reconcile to the root", err=True)
        sys.exit(1)


# Main entry point
if __name__ == '__main__':
    cli()

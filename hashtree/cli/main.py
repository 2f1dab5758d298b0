"""
CLI entry point for Hashtree.

Provides commands for building a Merkle tree over leaf values, printing its
root and layers, generating inclusion proofs and verifying them.

Exit codes:
- 0: success (for verify: the proof is valid)
- 1: usage, configuration, construction or index error
- 2: verify ran successfully but the proof is invalid
"""

import json
import sys
from pathlib import Path
from typing import Optional, Sequence

import click
from rich.console import Console

from hashtree._version import __version__
from hashtree.cli.context import CLIContext, pass_context
from hashtree.cli.display import (
    format_layers,
    render_layers,
    render_proof,
    render_verification,
)
from hashtree.config.settings import get_default_config_path, load_config
from hashtree.exceptions import (
    EncodingError,
    InvalidConfigurationError,
    TreeError,
)
from hashtree.logging_config import get_logger, setup_logging
from hashtree.merkle.encoding import digest_from_hex
from hashtree.merkle.proof import proof_from_dict, proof_to_dict
from hashtree.merkle.tree import HashTree

logger = get_logger(__name__)

EXIT_ERROR = 1
EXIT_INVALID_PROOF = 2


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Override the configured logging level',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='hashtree')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    Hashtree - Merkle tree commitments with membership proofs.

    Leaves are given as arguments or read one per line with --from-file.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(EXIT_ERROR)

    effective_log_level = log_level.upper() if log_level else ctx.config.logging.level
    log_file = Path(ctx.config.logging.file).expanduser() if ctx.config.logging.file else None
    try:
        setup_logging(
            level=effective_log_level,
            log_file=log_file,
            json_format=ctx.config.logging.format == "json",
        )
    except OSError as e:
        click.echo(f"Error: Failed to set up logging: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if verbose:
        logger.info(
            "cli_started",
            config_path=ctx.config_path or "defaults",
            log_level=effective_log_level,
        )


def leaf_input_options(func):
    """Shared LEAVES argument and --from-file option."""
    func = click.argument('leaves', nargs=-1)(func)
    func = click.option(
        '--from-file',
        '-f',
        'leaves_file',
        type=click.File('r', encoding='utf-8'),
        default=None,
        help='Read leaves from a file, one per line (use - for stdin)',
    )(func)
    return func


def _collect_leaves(leaves: Sequence[str], leaves_file) -> list:
    collected = list(leaves)
    if leaves_file is not None:
        collected.extend(line.rstrip("\r\n") for line in leaves_file)
    return collected


def _build_tree(ctx: CLIContext, leaves: Sequence[str]) -> HashTree:
    """Build a tree, exiting with a construction error on failure."""
    try:
        return HashTree(leaves, encoding=ctx.config.tree.text_encoding)
    except TreeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


@cli.command()
@leaf_input_options
@pass_context
def root(ctx: CLIContext, leaves, leaves_file):
    """Print the Merkle root of LEAVES as hex."""
    tree = _build_tree(ctx, _collect_leaves(leaves, leaves_file))
    click.echo(tree.get_root_hex())


@cli.command()
@click.option('--plain', is_flag=True, help='Print plain text instead of a table')
@leaf_input_options
@pass_context
def layers(ctx: CLIContext, plain, leaves, leaves_file):
    """Show every layer of the tree built from LEAVES."""
    tree = _build_tree(ctx, _collect_leaves(leaves, leaves_file))
    width = ctx.config.display.digest_width

    if plain:
        for line in format_layers(tree, digest_width=width):
            click.echo(line)
    else:
        render_layers(tree, Console(), digest_width=width)


@cli.command()
@click.option('--index', '-i', type=int, required=True, help='Index of the leaf to prove (0-based)')
@leaf_input_options
@pass_context
def proof(ctx: CLIContext, index, leaves, leaves_file):
    """Print the inclusion proof for the leaf at INDEX as JSON."""
    tree = _build_tree(ctx, _collect_leaves(leaves, leaves_file))

    try:
        steps = tree.get_proof(index)
    except TreeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if ctx.verbose:
        render_proof(steps, Console(stderr=True), digest_width=ctx.config.display.digest_width)

    click.echo(json.dumps(proof_to_dict(steps, root=tree.get_root(), leaf_index=index), indent=2))


@cli.command()
@click.option('--root', 'root_hex', default=None, help='Claimed root (hex); defaults to the root stored in the proof JSON')
@click.option('--leaf', required=True, help='Leaf value to verify')
@click.option(
    '--proof',
    'proof_source',
    required=True,
    help='Proof JSON as produced by the proof command, or - to read stdin',
)
@pass_context
def verify(ctx: CLIContext, root_hex, leaf, proof_source):
    """
    Verify that LEAF is included under ROOT.

    Exits 0 when the proof is valid and 2 when it is not. Malformed input
    (bad JSON, bad hex) exits 1.
    """
    if proof_source == "-":
        proof_source = click.get_text_stream("stdin").read()

    try:
        data = json.loads(proof_source)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Proof is not valid JSON: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if root_hex is None and isinstance(data, dict):
        root_hex = data.get("root")
    if root_hex is None:
        click.echo("Error: No root given and the proof does not contain one", err=True)
        sys.exit(EXIT_ERROR)

    try:
        claimed_root = digest_from_hex(root_hex)
        steps = proof_from_dict(data)
    except EncodingError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    valid = HashTree.verify_proof(
        claimed_root, leaf, steps, encoding=ctx.config.tree.text_encoding
    )
    render_verification(valid, Console())
    if not valid:
        sys.exit(EXIT_INVALID_PROOF)


@cli.command()
@pass_context
def demo(ctx: CLIContext):
    """Walk through building, proving, appending and re-proving."""
    console = Console()
    width = ctx.config.display.digest_width
    encoding = ctx.config.tree.text_encoding

    tree = HashTree(["a", "b", "c", "d"], encoding=encoding)
    console.print(f"Merkle root: {tree.get_root_hex()}", soft_wrap=True)
    render_layers(tree, console, digest_width=width)

    index = 2
    steps = tree.get_proof(index)
    console.print(f"Proof for leaf at index {index}:")
    render_proof(steps, console, digest_width=width)

    valid = HashTree.verify_proof(tree.get_root(), "c", steps, encoding=encoding)
    render_verification(valid, console)

    tree.add_leaf("e")
    console.print(f"Appended leaf 'e', new root: {tree.get_root_hex()}", soft_wrap=True)
    new_steps = tree.get_proof(tree.leaf_count - 1)
    new_valid = HashTree.verify_proof(tree.get_root(), "e", new_steps, encoding=encoding)
    render_verification(new_valid, console)

    if not (valid and new_valid):
        sys.exit(EXIT_INVALID_PROOF)


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()

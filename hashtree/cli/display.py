"""
Console rendering of trees and proofs.

Color System:
- Green (#00d787): Valid proof, root
- Red (#ff5f5f): Invalid proof, errors
- Magenta (#d787ff): Headers
- Cyan (#5fd7ff): Left/right markers
- Dim (#808080): Indices, secondary
"""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from hashtree.merkle.encoding import shorten_hex
from hashtree.merkle.proof import ProofStep
from hashtree.merkle.tree import HashTree


class Colors:
    """Semantic color definitions."""

    SUCCESS = "#00d787"
    ERROR = "#ff5f5f"
    NEUTRAL = "#ffffff"
    INFO = "#d787ff"
    HINT = "#5fd7ff"
    DIM = "#808080"


def format_layers(tree: HashTree, digest_width: int = 0) -> List[str]:
    """
    Plain text lines describing every layer, bottom to top.

    Args:
        tree: Tree to describe
        digest_width: Truncate hex digests to this many characters (0 = full)

    Returns:
        One line per layer, e.g. "Layer 1: [ab12..., cd34...]"
    """
    return [
        f"Layer {i}: [{', '.join(shorten_hex(d, digest_width) for d in layer)}]"
        for i, layer in enumerate(tree.layers)
    ]


def render_layers(
    tree: HashTree,
    console: Optional[Console] = None,
    digest_width: int = 0,
) -> None:
    """Render the tree layers as a rich table."""
    console = console or Console()

    table = Table(
        title=f"Merkle tree: {tree.leaf_count} leaves, {tree.depth} layers",
        show_header=True,
        header_style=f"bold {Colors.INFO}",
    )
    table.add_column("Layer", style=Colors.DIM, justify="right")
    table.add_column("Index", style=Colors.DIM, justify="right")
    table.add_column("Digest", style=Colors.NEUTRAL)

    top = tree.depth - 1
    for layer_index, layer in enumerate(tree.layers):
        for node_index, digest in enumerate(layer):
            style = f"bold {Colors.SUCCESS}" if layer_index == top else None
            table.add_row(
                str(layer_index),
                str(node_index),
                shorten_hex(digest, digest_width),
                style=style,
            )

    console.print(table)


def render_proof(
    proof: Sequence[ProofStep],
    console: Optional[Console] = None,
    digest_width: int = 0,
) -> None:
    """Render proof steps as a rich table."""
    console = console or Console()

    if not proof:
        console.print(f"[{Colors.DIM}]Empty proof (single-leaf tree)[/]")
        return

    table = Table(show_header=True, header_style=f"bold {Colors.INFO}")
    table.add_column("Step", style=Colors.DIM, justify="right")
    table.add_column("Sibling", style=Colors.NEUTRAL)
    table.add_column("Side", style=Colors.HINT)

    for i, step in enumerate(proof):
        table.add_row(
            str(i),
            shorten_hex(step.sibling, digest_width),
            "left" if step.is_left else "right",
        )

    console.print(table)


def render_verification(valid: bool, console: Optional[Console] = None) -> None:
    """Print the verification outcome."""
    console = console or Console()
    if valid:
        console.print(f"[bold {Colors.SUCCESS}]✓ Proof is valid[/]")
    else:
        console.print(f"[bold {Colors.ERROR}]✗ Proof is invalid[/]")

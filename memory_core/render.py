from __future__ import annotations

from typing import List, Sequence

from .board import CardView


def render_board(snapshot: Sequence[Sequence[CardView]], show_coords: bool = True) -> str:
    """Draws a masked snapshot as a bordered text grid with 1-based row/column labels."""
    rows = len(snapshot)
    cols = len(snapshot[0]) if rows else 0
    border = "   +" + "-" * (cols * 4) + "+"
    lines: List[str] = [""]
    if show_coords:
        lines.append("    " + "".join(f"{c + 1:>3} " for c in range(cols)))
    lines.append(border)
    for r, row in enumerate(snapshot):
        label = f"{r + 1:>2} |" if show_coords else "   |"
        lines.append(label + "".join(f" {cell.symbol} |" for cell in row))
        lines.append(border)
    lines.append("")
    return "\n".join(lines)


def render_status(move_count: int) -> str:
    return f"Moves: {move_count}"

"""
Consistent visual styles for dual regulon scatterplots.

Domain Conventions
------------------
- Negative (anti-correlated) duals = dark green (#006400)
- Positive (co-correlated) duals = dark orange (#cd6600)
- Filled markers = tinted branch color with alpha; open markers = white fill
- Axes span the full correlation range [-1, 1]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import matplotlib.colors as mcolors

RGBA = tuple[float, float, float, float]

# Marker fill sits at step 15 of a 30-step ramp from the base color to white
TINT_STEPS = 30
TINT_POSITION = 15


@dataclass(frozen=True)
class DualPalette:
    """
    Colors for dual regulon target clouds.

    Attributes
    ----------
    negative : str
        Outline color for targets of negative duals (R < 0)
    positive : str
        Outline color for targets of positive duals (R >= 0)
    open_fill : str
        Fill for the contrast (unfilled-looking) category
    """
    negative: str = "#006400"   # R darkgreen
    positive: str = "#cd6600"   # R darkorange3
    open_fill: str = "white"

    @classmethod
    def from_colors(cls, colors: Sequence[str]) -> DualPalette:
        """Build from a (negative, positive) pair of color specs."""
        if len(colors) != 2:
            raise ValueError(f"Expected 2 colors (negative, positive), got {len(colors)}")
        for color in colors:
            if not mcolors.is_color_like(color):
                raise ValueError(f"'{color}' is not a valid color")
        return cls(negative=colors[0], positive=colors[1])


def tint_toward_white(
    color: str,
    steps: int = TINT_STEPS,
    position: int = TINT_POSITION,
) -> tuple[float, float, float]:
    """
    Blend a color toward white.

    Picks the ``position``-th color (1-based) of a linear RGB ramp of
    ``steps`` colors running from ``color`` to white.

    Examples
    --------
    >>> tint_toward_white("black", steps=3, position=2)
    (0.5, 0.5, 0.5)
    """
    if steps < 2 or not 1 <= position <= steps:
        raise ValueError(f"position must be in [1, {steps}] with steps >= 2")
    fraction = (position - 1) / (steps - 1)
    r, g, b = mcolors.to_rgb(color)
    return (
        r + (1.0 - r) * fraction,
        g + (1.0 - g) * fraction,
        b + (1.0 - b) * fraction,
    )


def fill_color(color: str, alpha: float) -> RGBA:
    """Tinted marker fill for a branch color with the given opacity."""
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")
    return (*tint_toward_white(color), alpha)


def format_corr_label(value: float) -> str:
    """
    Legend text for an aggregate correlation, shown unrounded.

    Examples
    --------
    >>> format_corr_label(-0.42)
    'R= -0.42'
    >>> format_corr_label(-0.4236517)
    'R= -0.4236517'
    """
    return f"R= {value}"

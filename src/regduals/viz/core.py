"""
Core visualization primitives: Figure wrapper and rendering surfaces.

A rendering surface owns the lifecycle of one plot page: the figure is
created, handed out for drawing, emitted (written to a PDF page or shown),
and closed on every exit path. The plotting code only ever draws on the
axes it receives, so tests can inject a surface that records figures
instead of performing file I/O.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import matplotlib.figure
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.backends.backend_pdf import PdfPages

__all__ = ['Figure', 'RenderSurface', 'MatplotlibSurface']

logger = logging.getLogger(__name__)


@dataclass
class Figure:
    """
    One plot page and where it went.

    Attributes
    ----------
    fig : matplotlib.figure.Figure
        Page being drawn
    title : str
        Pair label, e.g. "IRF8.vs.STAT1"
    path : Path, optional
        PDF destination; None shows the page instead
    metadata : dict
        Free-form extras; "created_at" is filled in automatically
    """
    fig: matplotlib.figure.Figure
    title: str
    path: Optional[Path] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        if "created_at" not in self.metadata:
            self.metadata["created_at"] = datetime.now().isoformat()

    @property
    def axes(self) -> Axes:
        return self.fig.axes[0]

    def close(self):
        """Close the figure to free memory."""
        plt.close(self.fig)


class RenderSurface:
    """
    Base rendering surface.

    Subclasses decide what happens to a finished page by overriding
    ``emit`` and, if they keep figures alive, ``release``.

    Parameters
    ----------
    figsize : tuple[float, float]
        Page size in inches.
    """

    def __init__(self, figsize: tuple[float, float] = (3.0, 3.0)):
        self.figsize = figsize

    @contextmanager
    def page(self, path: Optional[Path] = None, title: str = "") -> Iterator[Axes]:
        """
        Open a page, yield its axes for drawing, then emit and close it.

        The page is emitted only if drawing completes; the figure is closed
        whether or not drawing raised.
        """
        fig, ax = plt.subplots(figsize=self.figsize)
        figure = Figure(fig=fig, title=title, path=path)
        try:
            yield ax
            self.emit(figure)
        finally:
            self.release(figure)

    def emit(self, figure: Figure) -> None:
        raise NotImplementedError

    def release(self, figure: Figure) -> None:
        figure.close()


class MatplotlibSurface(RenderSurface):
    """
    Writes pages with a path to single-page PDF documents, shows the rest
    on the active matplotlib display.
    """

    def emit(self, figure: Figure) -> None:
        if figure.path is None:
            plt.show()
            return

        path = Path(figure.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(path) as pdf:
            pdf.savefig(figure.fig, facecolor="white")
        logger.info(f"File '{path}' generated!")

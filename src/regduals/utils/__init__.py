"""Utility modules for dual regulon processing."""

from regduals.utils.fileio import (
    atomic_target,
    atomic_write_csv,
)

__all__ = [
    'atomic_target',
    'atomic_write_csv',
]

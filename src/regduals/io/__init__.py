"""
Input/output for dual regulon analyses.

Loading:
    load_dual_regulon_set: read a dual regulon directory of CSV tables
    load_regulatory_network: read one regulon set
    load_params: read the parameter record (YAML)

Writing:
    write_reports: per-pair report CSVs
"""

from regduals.io.loaders import load_params, load_regulatory_network, load_dual_regulon_set
from regduals.io.writers import write_reports

__all__ = [
    'load_params',
    'load_regulatory_network',
    'load_dual_regulon_set',
    'write_reports',
]

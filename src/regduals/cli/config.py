"""
Configuration file support for the regduals CLI.

Plot options can live in a YAML or JSON file; flags typed on the command
line take precedence over it.

Example ``plot.yaml``:

    input: results/duals
    output: figures/
    report_dir: results/reports
    motifs: [IRF8.vs.STAT1, PRDM1.vs.STAT4]
    estimator: spearman
    style:
      alpha: 0.8
      colors: ["#006400", "#cd6600"]
      lwd: 0.7
    targets:
      shared: true
      assigned_association: true
"""

import json
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from regduals.stats.correlation import normalize_estimator
from regduals.viz.styles import DualPalette


_LOADERS = {
    '.yaml': (yaml.safe_load, yaml.YAMLError, 'YAML'),
    '.yml': (yaml.safe_load, yaml.YAMLError, 'YAML'),
    '.json': (json.load, json.JSONDecodeError, 'JSON'),
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Read a plot config from a .yaml, .yml or .json file.

    An empty file gives an empty config.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: On an unknown suffix, a parse error, or a top level
            that is not a mapping
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        parse, parse_error, kind = _LOADERS[config_path.suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Config {config_path.name} has unsupported suffix "
            f"'{config_path.suffix}' (expected one of: {', '.join(_LOADERS)})"
        ) from None

    with open(config_path, 'r') as f:
        try:
            config = parse(f)
        except parse_error as e:
            raise ValueError(f"Invalid {kind} in {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} must hold a mapping at top level")
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Check value types and ranges of a loaded config.

    Raises:
        ValueError: If configuration is invalid
    """
    if config.get('estimator') is not None:
        normalize_estimator(config['estimator'])

    motifs = config.get('motifs')
    if motifs is not None and not isinstance(motifs, list):
        raise ValueError(f"motifs must be a list of pair labels, got: {motifs!r}")

    style = config.get('style', {})
    if not isinstance(style, dict):
        raise ValueError("style must be a mapping")

    if 'alpha' in style:
        alpha = style['alpha']
        if not isinstance(alpha, (int, float)) or not 0 <= alpha <= 1:
            raise ValueError(f"style.alpha must be a number in [0, 1], got: {alpha}")

    if 'lwd' in style:
        lwd = style['lwd']
        if not isinstance(lwd, (int, float)) or lwd <= 0:
            raise ValueError(f"style.lwd must be a positive number, got: {lwd}")

    if 'colors' in style:
        DualPalette.from_colors(style['colors'])

    targets = config.get('targets', {})
    if not isinstance(targets, dict):
        raise ValueError("targets must be a mapping")
    for key in ('shared', 'assigned_association'):
        if key in targets and not isinstance(targets[key], bool):
            raise ValueError(f"targets.{key} must be true or false, got: {targets[key]!r}")


def _explicit_args(cli_args: Optional[List[str]]) -> set:
    """Names of arguments the user typed on the command line."""
    short_to_long = {'i': 'input', 'o': 'output', 'm': 'motifs', 'e': 'estimator'}
    explicit = set()
    for arg in cli_args or []:
        if arg.startswith('--'):
            explicit.add(arg[2:].split('=', 1)[0].replace('-', '_'))
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in short_to_long:
            explicit.add(short_to_long[arg[1]])
    return explicit


def merge_config_with_args(
    config: Dict[str, Any],
    args: Namespace,
    cli_args: Optional[List[str]] = None,
) -> Namespace:
    """
    Overlay config values on parsed arguments.

    A config value replaces the argument unless the user typed that flag
    (or its negating counterpart, e.g. ``--any-targets`` for
    ``targets.shared``). Detection works on ``cli_args``, the raw argv;
    with None every argument counts as a default.

    Returns a new Namespace; ``args`` is not modified.
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    def _apply(arg_name: str, value: Any, flags: tuple = ()) -> None:
        if value is None:
            return
        if arg_name in explicit or any(flag in explicit for flag in flags):
            return
        setattr(merged, arg_name, value)

    if config.get('input') is not None:
        _apply('input', Path(config['input']))
    _apply('output', config.get('output'))
    if config.get('report_dir') is not None:
        _apply('report_dir', Path(config['report_dir']))
    _apply('motifs', config.get('motifs'))
    _apply('estimator', config.get('estimator'))

    style = config.get('style', {})
    _apply('alpha', style.get('alpha'))
    _apply('colors', style.get('colors'))
    _apply('lwd', style.get('lwd'))

    targets = config.get('targets', {})
    if 'shared' in targets:
        _apply('shared_targets', targets['shared'], flags=('any_targets',))
    if 'assigned_association' in targets:
        _apply(
            'assigned_association',
            targets['assigned_association'],
            flags=('no_assigned_association',),
        )

    return merged

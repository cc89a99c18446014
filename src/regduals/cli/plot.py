"""
regduals plot command - Shared-target scatterplots for dual regulons.

Loads a dual regulon directory, draws one plot per evaluated pair and
optionally writes the per-gene reports.

Usage:
    regduals plot --input results/duals --output figures/
    regduals plot --input results/duals --motifs IRF8.vs.STAT1 --output figures/
    regduals plot --config plot.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from regduals.cli._validators import _estimator, _positive_float, _unit_interval
from regduals.viz.styles import DualPalette


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the plot subcommand."""
    parser = subparsers.add_parser(
        "plot",
        help="Plot shared target clouds of dual regulons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Plot the shared target clouds of dual regulons.

Each pair is drawn as a scatter of target correlations with the two
regulators; negative duals emphasize discordant targets, positive duals
concordant ones.

Examples:
  regduals plot --input results/duals --output figures/
  regduals plot --input results/duals --motifs IRF8.vs.STAT1 --report-dir reports/
  regduals plot --config plot.yaml --estimator kendall
        """
    )

    # Input/output
    parser.add_argument("--input", "-i", type=Path, default=None,
                        help="Dual regulon directory (gexp.csv, motifs.csv, network1/, network2/)")
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Prefix for PDF files, '<prefix><reg1>.vs.<reg2>.pdf' "
                             "(default: show plots on screen)")
    parser.add_argument("--report-dir", type=Path, default=None,
                        help="Directory for per-pair report CSVs (optional)")
    parser.add_argument("--config", "-c", type=Path, default=None,
                        help="YAML or JSON config file; explicit flags override it")

    # Selection
    parser.add_argument("--motifs", "-m", nargs="+", default=None,
                        help="Pair labels from motifs.csv to plot (default: all)")
    parser.add_argument("--estimator", "-e", type=_estimator, default=None,
                        help="spearman, kendall or pearson (default: from params.yaml)")
    parser.add_argument("--any-targets", dest="shared_targets", action="store_false", default=True,
                        help="Include targets of either regulator, not only shared ones")
    parser.add_argument("--no-assigned-association", dest="assigned_association",
                        action="store_false", default=True,
                        help="Report raw correlations for genes without an edge")

    # Style
    parser.add_argument("--alpha", type=_unit_interval, default=0.80,
                        help="Fill opacity in [0, 1] (default: 0.8)")
    parser.add_argument("--colors", nargs=2, metavar=("NEGATIVE", "POSITIVE"),
                        default=[DualPalette.negative, DualPalette.positive],
                        help="Outline colors for negative and positive duals")
    parser.add_argument("--lwd", type=_positive_float, default=0.70,
                        help="Marker line width (default: 0.7)")

    parser.set_defaults(func=run_plot)


def run_plot(args: argparse.Namespace, cli_args: Optional[List[str]] = None) -> int:
    """Execute the plot command."""
    from regduals.cli.config import load_config, merge_config_with_args, validate_config
    from regduals.core.motifs import MotifSelectionError
    from regduals.core.network import RegulatorNotFoundError
    from regduals.io.loaders import load_dual_regulon_set
    from regduals.io.writers import write_reports
    from regduals.viz.duals import plot_duals

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        if args.config is not None:
            config = load_config(args.config)
            validate_config(config)
            args = merge_config_with_args(config, args, cli_args)

        if args.input is None:
            raise ValueError("No input directory given (use --input or 'input' in the config)")

        duals = load_dual_regulon_set(args.input)
        logger.info(f"Loaded {duals}")

        reports = plot_duals(
            duals,
            names_motifs=args.motifs,
            filepath=args.output,
            alpha=args.alpha,
            line_colors=args.colors,
            lwd=args.lwd,
            estimator=args.estimator,
            shared_targets=args.shared_targets,
            map_assigned_association=args.assigned_association,
            progress=True,
        )

        if args.report_dir is not None:
            write_reports(reports, args.report_dir)
    except (
        OSError,
        ValueError,
        TypeError,
        MotifSelectionError,
        RegulatorNotFoundError,
    ) as e:
        # KeyError subclasses quote their message; unwrap for display
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {message}", file=sys.stderr)
        return 1

    logger.info(f"Done: {len(reports)} pairs plotted")
    return 0

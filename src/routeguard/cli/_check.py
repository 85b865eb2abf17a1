"""``routeguard check`` — route conflict detection command.

Loads an event document, runs one analysis over it and prints the
summary to stdout. Exits with code 1 if error findings remain.
"""

import argparse
import logging
import sys

from routeguard.analysis import Analyzer
from routeguard.config import AnalysisConfig
from routeguard.errors import ConfigurationError, EventError
from routeguard.events import load_events_file


def _build_config(args: argparse.Namespace) -> AnalysisConfig:
    """Overlay CLI flags on the default ``AnalysisConfig``."""
    options: dict[str, object] = {}
    if args.level is not None:
        options["normalization_level"] = args.level
    if args.max_depth is not None:
        options["max_router_depth"] = args.max_depth
    if args.severity is not None:
        options["severity"] = args.severity
    if args.no_warn_static:
        options["warn_on_static_vs_dynamic"] = False
    if args.preserve_constraints:
        options["preserve_constraints"] = True
    if args.global_prefix:
        options["global_prefix"] = args.global_prefix
    if args.debug:
        options["debug"] = True
    return AnalysisConfig.from_mapping(options)


def run_check(args: argparse.Namespace) -> None:
    """Check an event document for duplicate and conflicting routes.

    Prints the analysis summary and raises ``SystemExit(1)`` when any
    error-severity finding is reported or the input is unusable.
    """
    try:
        config = _build_config(args)
        if config.debug:
            logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")
        analyzer = Analyzer(config)
        files = load_events_file(args.events)
    except (OSError, EventError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = analyzer.run(files)
    print(result.summary())
    if not result.ok:
        raise SystemExit(1)

from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

from reviewtree.domain.constants import DUPLICATES_LAST_WINS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the reviewtree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="reviewtree",
        description=(
            "Aggregate per-file change records into a compressed, review-aware "
            "directory tree and export it as CSV."
        ),
    )

    # --- Record Source ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="JSON file holding the batch of change entries.",
    )
    source.add_argument(
        "-u", "--url",
        dest="source_url",
        default=None,
        help="URL answering with the batch of change entries as JSON.",
    )
    p.add_argument(
        "--timeout",
        dest="source_timeout",
        type=int,
        default=None,
        help="Seconds to wait for the record source.",
    )

    # --- Assembly ---
    p.add_argument(
        "--dedupe",
        action="store_true",
        help="Keep only the last entry of a repeated path instead of accumulating all.",
    )

    # --- Output ---
    p.add_argument(
        "-e", "--export",
        dest="export_path",
        default=None,
        help="Write the flat CSV export to this path.",
    )
    p.add_argument(
        "--no-tree",
        action="store_true",
        help="Do not print the directory tree.",
    )
    p.add_argument(
        "--expand-all",
        action="store_true",
        help="Also expand fully reviewed directories in the printed tree.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON instead of a tree.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file merged over the defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only options given on the command line appear with a non-None value.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "source_url": args.source_url,
        "source_timeout": args.source_timeout,
        "export_path": args.export_path,
    }

    # A source chosen on the command line replaces one from a config file
    if args.input_path:
        overrides["source_url"] = ""
    elif args.source_url:
        overrides["input_path"] = ""

    if args.dedupe:
        overrides["duplicate_policy"] = DUPLICATES_LAST_WINS
    if args.no_tree:
        overrides["print_tree"] = False
    if args.expand_all:
        overrides["expand_all"] = True

    return overrides

from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, config file and CLI overrides),
pipeline execution, tree rendering and CSV export.
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from reviewtree.core.analysis.tree_renderer import render_display_rows
from reviewtree.core.export.csv_export import write_export_csv
from reviewtree.core.pipeline.engine import run_pipeline
from reviewtree.core.pipeline.stages.validator import validate_config
from reviewtree.domain.config import load_config
from reviewtree.domain.errors import TreeInvariantError
from reviewtree.domain.pipeline_models import PipelineResult
from reviewtree.domain.tree_models import DirectoryNode, Tree
from reviewtree.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from reviewtree.infra.sources import source_from_config
from reviewtree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_NO_DATA = 3
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input,
             3 no data, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    """Resolve configuration, run the pipeline and emit its outputs."""
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration: defaults < config file < CLI overrides
    base_conf = load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight source verification
    input_path = clean_conf["input_path"]
    if input_path and not os.path.isfile(input_path):
        msg = f"Input file does not exist: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    source = source_from_config(clean_conf)
    if source is None:
        msg = "No record source given. Use --input FILE or --url URL."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_INPUT

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(source, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except TreeInvariantError as e:
        logger.critical(f"Internal tree invariant violated: {e}", exc_info=True)
        print(f"ERROR: internal error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if not result.has_data:
        print(f"No difference found: {result.error}", file=sys.stderr)
        if clean_conf["export_path"]:
            print("Export skipped: there is no data to export.", file=sys.stderr)
        return EXIT_NO_DATA

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(_result_to_json(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, clean_conf)

    # 7. Export phase
    export_path = clean_conf["export_path"]
    if export_path:
        try:
            final_path = write_export_csv(export_path, result.export_rows)
        except OSError as e:
            logger.error(f"Failed to write export '{export_path}': {e}")
            print(f"ERROR: cannot write export: {e}", file=sys.stderr)
            return EXIT_FAILURE
        if not args.json_output:
            print(f"Export written: {final_path}")

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Overrides set to None (option not given) leave the base value intact.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult, cfg: Dict[str, Any]) -> None:
    """Print the tree and the review progress to the standard output."""
    if cfg["print_tree"]:
        for line in render_display_rows(result.display_rows, expand_all=cfg["expand_all"]):
            print(line)
        print()

    progress = result.progress
    print(
        f"Reviewed: {progress.label} "
        f"({progress.reviewed_magnitude:,} / {progress.total_magnitude:,})"
    )

    summary = result.summary
    if summary.get("rejected"):
        print(f"Entries rejected: {summary['rejected']}")
    if summary.get("duplicates"):
        print(f"Duplicate paths: {', '.join(summary['duplicates'])}")


def _result_to_json(result: PipelineResult) -> Dict[str, Any]:
    """Build the JSON document printed by --json."""
    return {
        "ok": result.ok,
        "progress": {
            "reviewed_magnitude": result.progress.reviewed_magnitude,
            "total_magnitude": result.progress.total_magnitude,
            "percentage": result.progress.percentage,
        },
        "tree": _tree_to_json(result.tree),
        "files": [row._asdict() for row in result.export_rows],
        "summary": result.summary,
    }


def _tree_to_json(tree: Tree) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for key in sorted(tree):
        node = tree[key]
        entry: Dict[str, Any] = {
            "key": key,
            "magnitude": node.magnitude,
            "reviewed": node.reviewed,
        }
        if isinstance(node, DirectoryNode):
            entry["children"] = _tree_to_json(node.children)
        else:
            entry["path"] = node.origin_path
        out.append(entry)
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, saved configuration and command-line overrides), release
execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from deobfuscator4j.core.pipeline.engine import run_release
from deobfuscator4j.core.pipeline.validator import validate_config
from deobfuscator4j.domain.config import get_default_config, load_config, save_config
from deobfuscator4j.domain.release_models import ReleaseResult
from deobfuscator4j.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from deobfuscator4j.interface.cli import args as cli_args

logger = get_logger(__name__)

# Settings that outlive a single build; the rest is given per release.
_PERSISTED_KEYS = ("api_host", "api_key", "environment", "timeout", "skip_verification")

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on failure, 2 when the rename log is missing,
             130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    log_file = None
    if args.log_file is not None:
        log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig(
        level="DEBUG" if args.debug else "INFO",
        console=True,
        log_file=log_file,
    ))

    logger.debug("CLI execution initiated. Resolving configuration...")

    # 2. Configuration hierarchy: defaults or saved file, then CLI overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config({k: clean_conf[k] for k in _PERSISTED_KEYS})
        print("Configuration saved.")
        return 0

    # 3. Pre-flight input verification
    renamelog = clean_conf.get("renamelog", "")
    if not renamelog or not os.path.isfile(renamelog):
        msg = f"Rename log does not exist: {renamelog or '(not given)'}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 4. Release
    try:
        result = run_release(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Release interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    # 5. Output rendering
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge the known, non-None override keys into `base`."""
    out = dict(base)
    keys_to_merge = [
        "api_key", "environment", "build", "renamelog", "project_dir",
        "api_host", "timeout", "skip_verification",
    ]
    for k in keys_to_merge:
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ReleaseResult) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    if result.dry_run:
        print("Dry run complete. Nothing was uploaded.")
    else:
        print(f"Release uploaded: build {result.build} ({result.environment}).")

    print(f"Rename log: {result.renamelog}")
    labels = {
        "packages": "Packages",
        "classes": "Classes",
        "located": "Classes with source files",
        "methods": "Methods",
    }
    for key, label in labels.items():
        if key in summary:
            print(f"{label}: {summary[key]}")


if __name__ == "__main__":
    sys.exit(main())

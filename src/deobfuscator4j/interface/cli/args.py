from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed arguments into
configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the deobfuscator4j CLI.

    Positionals are optional at the parser level so that `--dump-config`
    works on its own; the application checks them before releasing.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="deobfuscator4j",
        description=(
            "Upload the yGuard or ProGuard rename log of a Java build so that "
            "obfuscated stack traces can be mapped back to source."
        ),
    )

    # --- Release Identity ---
    p.add_argument("api_key", nargs="?", default=None, help="API key of the project.")
    p.add_argument("environment", nargs="?", default=None, help="Environment the build is deployed to.")
    p.add_argument("build", nargs="?", default=None, help="Build identifier (version code, commit, ...).")
    p.add_argument(
        "renamelog",
        nargs="?",
        default=None,
        help="Path to the rename log (yGuard .xml or ProGuard .txt).",
    )

    # --- Paths and Server ---
    p.add_argument(
        "-p", "--project-dir",
        dest="project_dir",
        default=None,
        help="Project root searched for .java sources (default: current directory).",
    )
    p.add_argument(
        "--api-host",
        dest="api_host",
        default=None,
        help="Base URL of the crash-reporting server.",
    )
    p.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Upload timeout in seconds.",
    )
    p.add_argument(
        "--skip-verification",
        action="store_true",
        help="Do not verify the server's TLS certificate.",
    )

    # --- Runtime ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and locate sources but do not upload.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Save the resolved server settings as the new defaults and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to a file (default location when no path is given).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the release result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; None means "not given on the command line".
    """
    overrides: Dict[str, Any] = {
        "api_key": args.api_key,
        "environment": args.environment,
        "build": args.build,
        "renamelog": args.renamelog,
        "project_dir": args.project_dir,
        "api_host": args.api_host,
        "timeout": args.timeout,
    }

    if args.skip_verification:
        overrides["skip_verification"] = True

    return overrides

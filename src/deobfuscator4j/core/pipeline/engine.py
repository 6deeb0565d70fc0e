from __future__ import annotations

"""
Release orchestration pipeline.

Coordinates one release of a build's deobfuscation data:
1. Validates configuration and paths.
2. Parses the rename log into a Namespace.
3. Locates the source file of every class under the project directory.
4. Serializes the Namespace into the compressed upload payload.
5. Uploads it to the crash-reporting server (skipped on dry runs).
"""

import logging
import os
from typing import Any, Dict, Optional

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.core.pipeline.validator import validate_config
from deobfuscator4j.core.rename_log import parse_rename_log
from deobfuscator4j.core.services.locator import locate_sources
from deobfuscator4j.core.services.serializer import encode_namespace
from deobfuscator4j.domain.errors import DeobfuscationError
from deobfuscator4j.domain.release_models import (
    ReleaseResult,
    create_error_result,
    create_success_result,
)
from deobfuscator4j.infra.fs import normalize_path
from deobfuscator4j.infra.network import build_release_payload, upload_deobfuscation

logger = logging.getLogger(__name__)

_RELEASE_IDENTITY_FIELDS = ("api_key", "environment", "build")


def run_release(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> ReleaseResult:
    """
    Execute the full release pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, stop after serialization and upload nothing.

    Returns:
        ReleaseResult: Object containing status and summary counts.
    """
    logger.info("Release pipeline started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    cfg["renamelog"] = normalize_path(cfg["renamelog"], "")
    cfg["project_dir"] = normalize_path(cfg["project_dir"], os.getcwd())

    if not os.path.isfile(cfg["renamelog"]):
        msg = f"Rename log not found: {cfg['renamelog']}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    if not os.path.isdir(cfg["project_dir"]):
        msg = f"Invalid project directory: {cfg['project_dir']}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    if not dry_run:
        missing = [f for f in _RELEASE_IDENTITY_FIELDS if not cfg[f]]
        if missing:
            msg = f"Missing required release settings: {', '.join(missing)}"
            logger.error(msg)
            return create_error_result(msg, cfg)

    # -------------------------------------------------------------------------
    # 2) Parse & Locate
    # -------------------------------------------------------------------------
    try:
        namespace = parse_rename_log(cfg["renamelog"])
        if namespace is None:
            msg = f"Unsupported rename log format: {cfg['renamelog']}"
            return create_error_result(msg, cfg)

        located = locate_sources(cfg["project_dir"], namespace)
    except (DeobfuscationError, OSError) as e:
        msg = f"Failed to build deobfuscation map: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    summary = _summarize(namespace, located)
    logger.info(
        f"Namespace ready: {summary['packages']} packages, {summary['classes']} classes "
        f"({summary['located']} located), {summary['methods']} methods"
    )

    # -------------------------------------------------------------------------
    # 3) Serialize & Upload
    # -------------------------------------------------------------------------
    encoded = encode_namespace(namespace)
    summary["payload_bytes"] = len(encoded)

    if dry_run:
        logger.info("Dry run: upload skipped.")
        return create_success_result(cfg, dry_run=True, uploaded=False, summary_extra=summary)

    payload = build_release_payload(cfg["api_key"], cfg["environment"], cfg["build"], encoded)
    ok, message = upload_deobfuscation(
        cfg["api_host"],
        payload,
        timeout=cfg["timeout"],
        verify=not cfg["skip_verification"],
    )
    if not ok:
        return create_error_result(f"Upload failed: {message}", cfg, summary_extra=summary)

    logger.info(f"Uploaded deobfuscation data for build {cfg['build']} ({cfg['environment']}).")
    return create_success_result(cfg, dry_run=False, uploaded=True, summary_extra=summary)


def _summarize(namespace: Namespace, located: int) -> Dict[str, Any]:
    return {
        "packages": sum(1 for _ in namespace.iter_packages()),
        "classes": sum(1 for _ in namespace.iter_classes()),
        "methods": sum(1 for _ in namespace.iter_methods()),
        "located": located,
    }

from __future__ import annotations

"""
Rename Log Parsing.

Selects the parser for a rename log by file extension:
- `.xml`: yGuard
- `.txt`: ProGuard / R8
"""

import logging
import os
from typing import Callable, Dict, Optional

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.core.rename_log.proguard import parse_proguard, read_proguard
from deobfuscator4j.core.rename_log.yguard import parse_yguard, repair_inner_class_obfuscation

logger = logging.getLogger(__name__)

PARSERS: Dict[str, Callable[[str], Namespace]] = {
    ".xml": parse_yguard,
    ".txt": parse_proguard,
}


def parse_rename_log(log_path: str) -> Optional[Namespace]:
    """
    Parse a rename log into a Namespace.

    Args:
        log_path: Path to a yGuard (`.xml`) or ProGuard (`.txt`) log.

    Returns:
        Optional[Namespace]: The populated namespace, or None when the file
                             extension matches neither format.
    """
    _, ext = os.path.splitext(log_path)
    parser = PARSERS.get(ext)
    if parser is None:
        logger.warning(f"Unsupported rename log format '{ext}' for {log_path}")
        return None

    logger.debug(f"Parsing {log_path} with {parser.__name__}")
    return parser(log_path)


__all__ = [
    "PARSERS",
    "parse_rename_log",
    "parse_proguard",
    "parse_yguard",
    "read_proguard",
    "repair_inner_class_obfuscation",
]

from __future__ import annotations

"""
ProGuard Mapping Parser.

Reads the `mapping.txt` file ProGuard (and R8) writes:

    com.example.Foo -> com.example.a:
        int count -> b
        12:14:void bar(int[],java.lang.String) -> a

Class lines open a class context; indented field and method lines belong to
the most recent class. Fields are not modelled and are skipped.
"""

import logging
import re
from typing import Optional, TextIO, Union

from deobfuscator4j.core.namespace import AliasOutcome, Namespace
from deobfuscator4j.domain.errors import MappingSyntaxError
from deobfuscator4j.domain.java_models import JavaClass, Package

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# LINE GRAMMAR
# -----------------------------------------------------------------------------

JAVA_PACKAGE_COMPONENT = r"[a-z][a-z0-9_]*"
JAVA_PACKAGE_NAME = rf"{JAVA_PACKAGE_COMPONENT}(?:\.{JAVA_PACKAGE_COMPONENT})*"
JAVA_IDENTIFIER = r"[A-Za-z0-9_$]+"
JAVA_CLASS_PATH = rf"(?:{JAVA_PACKAGE_NAME}\.)?{JAVA_IDENTIFIER}"
JAVA_PRIMITIVE = r"(?:boolean|byte|char|short|int|long|float|double|void)"
JAVA_TYPE = rf"(?:{JAVA_PRIMITIVE}|{JAVA_CLASS_PATH})(?:\[\])*"
JAVA_TYPE_LIST = rf"{JAVA_TYPE}(?:,\s?{JAVA_TYPE})*"
JAVA_METHOD_SIGNATURE = rf"{JAVA_TYPE} {JAVA_IDENTIFIER}\((?:{JAVA_TYPE_LIST})?\)"

CLASS_LINE = re.compile(rf"({JAVA_CLASS_PATH}) -> ({JAVA_CLASS_PATH}):")
FIELD_LINE = re.compile(rf"    {JAVA_TYPE} {JAVA_IDENTIFIER} -> {JAVA_IDENTIFIER}")
METHOD_LINE = re.compile(rf"    (?:\d+:\d+:)?({JAVA_METHOD_SIGNATURE}) -> ({JAVA_IDENTIFIER})")

_COMMENT_PREFIX = "#"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_proguard(log_path: str) -> Namespace:
    """
    Build a Namespace from a ProGuard mapping file.

    Args:
        log_path: Path to the `.txt` mapping.

    Returns:
        Namespace: The populated namespace.

    Raises:
        MappingSyntaxError: On a line of unknown shape, a member line that
            appears before any class line, or a file that is not UTF-8.
    """
    try:
        with open(log_path, "r", encoding="utf-8") as f:
            return read_proguard(f)
    except UnicodeDecodeError as e:
        raise MappingSyntaxError(f"Rename log '{log_path}' is not valid UTF-8: {e}") from e


def read_proguard(stream: TextIO) -> Namespace:
    """Parse mapping lines from an open text stream."""
    namespace = Namespace()
    current_class: Optional[Union[JavaClass, Package]] = None
    classes = methods = duplicates = 0

    for line_number, raw_line in enumerate(stream, start=1):
        line = raw_line.rstrip("\r\n")

        if not line.strip() or line.lstrip().startswith(_COMMENT_PREFIX):
            continue

        class_match = CLASS_LINE.fullmatch(line)
        if class_match:
            cleartext, obfuscated = class_match.groups()
            # Only the last segment of the obfuscated path is the real rename
            current_class = namespace.add_class_alias(cleartext, obfuscated.split(".")[-1])
            classes += 1
            continue

        if FIELD_LINE.fullmatch(line):
            if current_class is None:
                raise MappingSyntaxError("Unexpected field mapping outside of class", line_number, line)
            continue

        method_match = METHOD_LINE.fullmatch(line)
        if method_match:
            if current_class is None:
                raise MappingSyntaxError("Unexpected method mapping outside of class", line_number, line)
            if not isinstance(current_class, JavaClass):
                logger.debug(f"Skipping method of non-class {current_class!r}: {line.strip()}")
                continue

            signature, obfuscation = method_match.groups()
            outcome = namespace.register_method_alias(current_class, signature, obfuscation)
            if outcome is AliasOutcome.DUPLICATE:
                # Compiler-generated bridge methods share the erased signature;
                # the first mapping is kept.
                duplicates += 1
            else:
                methods += 1
            continue

        raise MappingSyntaxError("Invalid mapping line", line_number, line)

    logger.info(
        f"Parsed ProGuard mapping: {classes} classes, {methods} methods "
        f"({duplicates} duplicate obfuscations ignored)"
    )
    return namespace

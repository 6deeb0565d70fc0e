from __future__ import annotations

"""
Method Signature and Identifier Grammar.

Parses textual method signatures such as
`com.foo.Bar finagle(com.foo.Bar, int[])` into their return type, name and
argument descriptors, splits array descriptors into base type and
dimensionality, and classifies dotted-identifier segments as package or
class names by their casing.
"""

import enum
import re
from dataclasses import dataclass
from typing import List, Tuple

from deobfuscator4j.domain.errors import SignatureSyntaxError

METHOD_REGEX = re.compile(
    r"^([a-z0-9_.$\[\]]+) ([a-z0-9_$]+)\(([a-z$0-9_.\[\] ,]*)\)",
    re.IGNORECASE,
)
_ARGUMENT_SEPARATOR = re.compile(r",\s*")
_ARRAY_SUFFIX = "[]"


@dataclass(frozen=True)
class MethodSignature:
    """
    The three captures of a method signature.

    Attributes:
        return_descriptor: Return type, e.g. "int[]".
        name: Method name.
        argument_descriptors: Argument types in declaration order.
    """
    return_descriptor: str
    name: str
    argument_descriptors: Tuple[str, ...]


class SegmentKind(enum.Enum):
    PACKAGE = "package"
    CLASS = "class"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_signature(signature: str) -> MethodSignature:
    """
    Split a method signature into return type, name and argument types.

    Args:
        signature: Text of the form `<type> <name>(<type>, <type>...)`.

    Returns:
        MethodSignature: The parsed captures.

    Raises:
        SignatureSyntaxError: If the text does not match the grammar.
    """
    match = METHOD_REGEX.match(signature)
    if not match:
        raise SignatureSyntaxError(signature)

    return_descriptor, name, raw_args = match.groups()
    args: List[str] = _ARGUMENT_SEPARATOR.split(raw_args) if raw_args else []
    return MethodSignature(return_descriptor, name, tuple(args))


def split_descriptor(descriptor: str) -> Tuple[str, int]:
    """
    Separate a type descriptor into base type name and array dimensionality.

    `"int[][]"` becomes `("int", 2)`; `"com.foo.Bar"` becomes
    `("com.foo.Bar", 0)`.
    """
    dimensionality = descriptor.count(_ARRAY_SUFFIX)
    return descriptor.replace(_ARRAY_SUFFIX, ""), dimensionality


def classify_segment(segment: str) -> SegmentKind:
    """Segments starting with an uppercase ASCII letter name classes."""
    if segment[:1] and "A" <= segment[0] <= "Z":
        return SegmentKind.CLASS
    return SegmentKind.PACKAGE

from __future__ import annotations

"""
Domain Error Kinds.

Exceptions raised while building or querying a Namespace. Lookups that
merely fail to find something return None instead of raising; everything
here is fatal to the operation that raised it.
"""

from typing import Optional


class DeobfuscationError(Exception):
    """Base class for every error raised by the deobfuscation core."""


class ObfuscationCollisionError(DeobfuscationError, ValueError):
    """
    An obfuscated name is already taken.

    Raised when a package obfuscation collides with a sibling package, or a
    method obfuscation collides with another method of the same class that
    has an identical argument list.

    Attributes:
        obfuscation: The contested obfuscated name.
        holder: Full name of the node that already carries it.
        claimant: Full name of the node that tried to take it.
    """

    def __init__(self, obfuscation: str, holder: str, claimant: str) -> None:
        self.obfuscation = obfuscation
        self.holder = holder
        self.claimant = claimant
        super().__init__(
            f"Tried to assign obfuscation {obfuscation!r} to {holder} and {claimant}"
        )


class IdentifierStructureError(DeobfuscationError, ValueError):
    """A dotted identifier places a package segment underneath a class."""

    def __init__(self, identifier: str, segment: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.segment = segment
        reason = reason or f"unexpected package segment {segment!r} after a class"
        super().__init__(f"Invalid identifier {identifier!r}: {reason}")


class SignatureSyntaxError(DeobfuscationError, ValueError):
    """A method signature does not match `<type> <name>(<type>, ...)`."""

    def __init__(self, signature: str) -> None:
        self.signature = signature
        super().__init__(f"Invalid method name {signature!r}")


class MappingSyntaxError(DeobfuscationError, ValueError):
    """
    A rename log could not be parsed.

    Attributes:
        line_number: 1-based line of the offending entry, when known.
        line: Raw content of the offending line, when known.
    """

    def __init__(
            self,
            message: str,
            line_number: Optional[int] = None,
            line: Optional[str] = None,
    ) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} (line {line_number}): {line!r}"
        super().__init__(message)

from __future__ import annotations

"""
Java Type System.

Primitive types and the capability shared by every type that can appear in a
method signature: a short `name` and a fully qualified `full_name`.
"""

from typing import Dict, Optional, Tuple

PRIMITIVE_NAMES: Tuple[str, ...] = (
    "boolean", "byte", "char", "short", "int", "long", "float", "double", "void",
)


class JavaType:
    """Anything usable as an argument or return type."""

    name: str

    @property
    def full_name(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.full_name}>"


class Primitive(JavaType):
    """A built-in Java type. Never obfuscated; one instance per name."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        object.__setattr__(self, "name", name)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")


PRIMITIVES: Tuple[Primitive, ...] = tuple(Primitive(n) for n in PRIMITIVE_NAMES)
_PRIMITIVES_BY_NAME: Dict[str, Primitive] = {p.name: p for p in PRIMITIVES}


def find_primitive(name: str) -> Optional[Primitive]:
    """Return the primitive called exactly `name`, or None."""
    return _PRIMITIVES_BY_NAME.get(name)

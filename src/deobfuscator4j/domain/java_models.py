from __future__ import annotations

"""
Namespace Tree Data Models.

Packages, classes, methods and arguments of a Java program, each carrying
its cleartext name and (once known) its obfuscated name. Children are owned
by their parent node; `parent` and `klass` attributes are back-references
used for full-name rendering and sibling checks.

Lookups on a node are split into find-only helpers (no mutation) and
`create_*` helpers; the Namespace composes the two into find-or-create.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from deobfuscator4j.domain.errors import ObfuscationCollisionError
from deobfuscator4j.domain.java_types import JavaType

# -----------------------------------------------------------------------------
# ARGUMENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Argument:
    """
    A method parameter or return type.

    Attributes:
        type: The base type (a Primitive, a JavaClass, or - for lowercase
              type names the casing heuristic reads as packages - a Package).
        dimensionality: Number of `[]` nestings; `int[][]` has 2.
    """
    type: Union[JavaType, "Package"]
    dimensionality: int = 0

    @property
    def is_array(self) -> bool:
        return self.dimensionality > 0

    def __str__(self) -> str:
        return f"{self.type.full_name}{'[]' * self.dimensionality}"


ArgumentList = Tuple[Argument, ...]


# -----------------------------------------------------------------------------
# CLASS CONTAINERS
# -----------------------------------------------------------------------------

class _ClassContainer:
    """Shared bookkeeping for nodes that own classes (packages and classes)."""

    _classes: Dict[str, "JavaClass"]

    @property
    def classes(self) -> List["JavaClass"]:
        return list(self._classes.values())

    def class_named(self, name: str) -> Optional["JavaClass"]:
        """Find a directly owned class by cleartext name."""
        return self._classes.get(name)

    def obfuscated_class(self, segment: str) -> Optional["JavaClass"]:
        """
        Find a directly owned class by obfuscated name.

        Falls back to a cleartext match when no class carries `segment` as
        its obfuscation, so partially deobfuscated names still resolve.
        """
        return _match_obfuscated(self._classes.values(), segment)

    def create_class(self, name: str) -> "JavaClass":
        return JavaClass(self, name)


class Package(_ClassContainer):
    """
    A Java package.

    Attributes:
        name: Last segment of the package name ("bar" for "com.foo.bar").
        parent: Enclosing package, or None for a root package.
    """

    def __init__(self, name: str, parent: Optional[Package] = None) -> None:
        self.name = name
        self.parent = parent
        self._obfuscation: Optional[str] = None
        self._children: Dict[str, Package] = {}
        self._classes: Dict[str, JavaClass] = {}
        if parent is not None:
            parent._children[name] = self

    @property
    def obfuscation(self) -> Optional[str]:
        return self._obfuscation

    @obfuscation.setter
    def obfuscation(self, value: Optional[str]) -> None:
        # Root packages have no siblings to compare against.
        if value is not None and self.parent is not None:
            for sibling in self.parent.children:
                if sibling is not self and sibling.obfuscation == value:
                    raise ObfuscationCollisionError(value, repr(sibling), repr(self))
        self._obfuscation = value

    @property
    def children(self) -> List[Package]:
        return list(self._children.values())

    def child(self, name: str) -> Optional[Package]:
        """Find a direct sub-package by cleartext name."""
        return self._children.get(name)

    def obfuscated_child(self, segment: str) -> Optional[Package]:
        """Find a direct sub-package by obfuscated name, falling back to cleartext."""
        return _match_obfuscated(self._children.values(), segment)

    def create_child(self, name: str) -> Package:
        return Package(name, self)

    @property
    def full_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.full_name}.{self.name}"

    @property
    def subpath(self) -> str:
        """Directory path of this package relative to a source root."""
        if self.parent is None:
            return self.name
        return f"{self.parent.subpath}/{self.name}"

    def __repr__(self) -> str:
        return f"<Package {self.full_name}>"


class JavaClass(JavaType, _ClassContainer):
    """
    A Java class or inner class.

    Attributes:
        name: Simple class name, possibly containing `$` (e.g. "Outer$6").
        parent: Owning package, or enclosing class for nested classes.
        obfuscation: Obfuscated simple name. Not checked against siblings.
        path: Source file path relative to the project root, once located.
    """

    def __init__(self, parent: Union[Package, JavaClass], name: str) -> None:
        self.name = name
        self.parent = parent
        self.obfuscation: Optional[str] = None
        self.path: Optional[str] = None
        self._methods: Dict[Tuple[str, ArgumentList], Method] = {}
        self._classes: Dict[str, JavaClass] = {}
        parent._classes[name] = self

    @property
    def full_name(self) -> str:
        return f"{self.parent.full_name}.{self.name}"

    @property
    def java_methods(self) -> List[Method]:
        return list(self._methods.values())

    @property
    def package(self) -> Package:
        """Nearest enclosing package."""
        node: Union[Package, JavaClass] = self.parent
        while isinstance(node, JavaClass):
            node = node.parent
        return node

    @property
    def subpath(self) -> str:
        """
        Expected source path suffix, e.g. "com/foo/Bar.java".

        Inner classes live in the file of their outermost enclosing class.
        """
        if isinstance(self.parent, JavaClass):
            return self.parent.subpath
        return f"{self.parent.subpath}/{self.name}.java"

    def find_method(self, name: str, arguments: Sequence[Argument]) -> Optional[Method]:
        """Find a method by cleartext name and exact argument list."""
        return self._methods.get((name, tuple(arguments)))

    def method_with_obfuscation(
            self,
            obfuscation: str,
            arguments: Sequence[Argument],
    ) -> Optional[Method]:
        """Find the method carrying `obfuscation` with an identical argument list."""
        args = tuple(arguments)
        for meth in self._methods.values():
            if meth.obfuscation == obfuscation and meth.arguments == args:
                return meth
        return None

    def create_method(
            self,
            name: str,
            return_type: Argument,
            arguments: Sequence[Argument],
    ) -> Method:
        return Method(self, name, return_type, arguments)


# -----------------------------------------------------------------------------
# METHODS
# -----------------------------------------------------------------------------

class Method:
    """
    A Java method. Overloads are distinct Method objects told apart by their
    argument lists.

    Attributes:
        klass: Owning class.
        name: Cleartext method name.
        return_type: Return type as an Argument (carries array dimensionality).
        arguments: Ordered parameter types.
    """

    def __init__(
            self,
            klass: JavaClass,
            name: str,
            return_type: Argument,
            arguments: Sequence[Argument] = (),
    ) -> None:
        self.klass = klass
        self.name = name
        self.return_type = return_type
        self.arguments: ArgumentList = tuple(arguments)
        self._obfuscation: Optional[str] = None
        klass._methods[(name, self.arguments)] = self

    @property
    def obfuscation(self) -> Optional[str]:
        return self._obfuscation

    @obfuscation.setter
    def obfuscation(self, value: Optional[str]) -> None:
        if value is not None:
            holder = self.klass.method_with_obfuscation(value, self.arguments)
            if holder is not None and holder is not self:
                raise ObfuscationCollisionError(value, repr(holder), repr(self))
        self._obfuscation = value

    @property
    def full_name(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.return_type} {self.name}({args})"

    def __repr__(self) -> str:
        return f"<Method {self.full_name}>"


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

_Named = Union[Package, JavaClass]


def _match_obfuscated(candidates: Iterable[_Named], segment: str) -> Optional[_Named]:
    """Prefer a node obfuscated as `segment`; otherwise one named `segment`."""
    by_name = None
    for node in candidates:
        if node.obfuscation == segment:
            return node
        if by_name is None and node.name == segment:
            by_name = node
    return by_name

from __future__ import annotations

"""
Namespace Registry.

The root of a Java program's name tree. Resolves dotted identifiers - fully
cleartext, fully obfuscated, or any mixture of the two - to packages and
classes, resolves method signatures to methods, and records the obfuscated
aliases a rename log assigns to each of them.

Naming conventions used throughout:
- "find" operations never mutate the tree and return None when nothing
  matches.
- "find-or-create" operations (`package`, `klass`, `java_type`,
  `java_method`, `argument`) add whatever nodes are missing along the way,
  using segment casing to decide between packages and classes.
"""

import enum
import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

from deobfuscator4j.core.analysis.signature import (
    SegmentKind,
    classify_segment,
    parse_signature,
    split_descriptor,
)
from deobfuscator4j.domain.errors import IdentifierStructureError, ObfuscationCollisionError
from deobfuscator4j.domain.java_models import Argument, JavaClass, Method, Package
from deobfuscator4j.domain.java_types import JavaType, find_primitive

logger = logging.getLogger(__name__)

Node = Union[Package, JavaClass]
TypeNode = Union[JavaType, Package]


class AliasOutcome(enum.Enum):
    """Result of registering a method alias."""
    REGISTERED = "registered"
    # Another method with the same argument list already owns the obfuscation.
    DUPLICATE = "duplicate"


class Namespace:
    """
    Registry of every known package, class and method of a Java program.

    Created empty and populated through the alias-registration and
    find-or-create operations. Not safe for concurrent mutation.
    """

    def __init__(self) -> None:
        self._package_roots: Dict[str, Package] = {}

    # ==========================================================================
    # PACKAGES AND CLASSES
    # ==========================================================================

    @property
    def package_roots(self) -> List[Package]:
        return list(self._package_roots.values())

    def package(self, identifier: str) -> Node:
        """
        **Find or create** a package or class by its full cleartext name.

        The first segment is always a root package. Later segments starting
        with an uppercase letter are classes (nested when they follow another
        class); the rest are packages.

        Args:
            identifier: A full name such as "com.foo.bar" or "com.foo.Bar".

        Returns:
            Node: The terminal Package or JavaClass.

        Raises:
            IdentifierStructureError: If a package segment follows a class.
        """
        parts = identifier.split(".")
        root_name = parts.pop(0)
        node: Node = self._package_roots.get(root_name) or self._create_root(root_name)

        for segment in parts:
            kind = classify_segment(segment)
            if isinstance(node, JavaClass):
                # A class segment midway nests ("com.foo.Outer.Inner") instead
                # of being rejected; rename logs spell inner classes with `$`.
                if kind is not SegmentKind.CLASS:
                    raise IdentifierStructureError(identifier, segment)
                node = node.class_named(segment) or node.create_class(segment)
            elif kind is SegmentKind.CLASS:
                node = node.class_named(segment) or node.create_class(segment)
            else:
                node = node.child(segment) or node.create_child(segment)
        return node

    klass = package

    def find_package(self, identifier: str) -> Optional[Node]:
        """
        **Find** a package or class by its full cleartext name.

        Walks existing nodes only; packages are preferred over classes when a
        segment could name either.
        """
        parts = identifier.split(".")
        node: Optional[Node] = self._package_roots.get(parts.pop(0))
        for segment in parts:
            if node is None:
                return None
            if isinstance(node, Package):
                node = node.child(segment) or node.class_named(segment)
            else:
                node = node.class_named(segment)
        return node

    def find_class(self, identifier: str) -> Optional[JavaClass]:
        """**Find** a class by its full cleartext name."""
        node = self.find_package(identifier)
        return node if isinstance(node, JavaClass) else None

    def obfuscated_package(self, identifier: str) -> Optional[Package]:
        """
        **Find** a package by its obfuscated (or partially obfuscated) name.

        Each segment matches a child obfuscated as that segment, or failing
        that, a child named that segment.

        Args:
            identifier: e.g. "com.foo.A".

        Returns:
            Optional[Package]: The package, or None if any segment is unknown.
        """
        parts = identifier.split(".")
        node = self._obfuscated_root(parts.pop(0))
        for segment in parts:
            if node is None:
                return None
            node = node.obfuscated_child(segment)
        return node

    def obfuscated_class(self, identifier: str) -> Optional[JavaClass]:
        """
        **Find** a class by its obfuscated (or partially obfuscated) name.

        Args:
            identifier: e.g. "com.foo.A.B".

        Returns:
            Optional[JavaClass]: The class, or None if any segment is unknown.
        """
        parts = identifier.split(".")
        class_segment = parts.pop()
        if not parts:
            return None

        node: Optional[Node] = self._obfuscated_root(parts.pop(0))
        for segment in parts:
            if node is None:
                return None
            if isinstance(node, Package):
                node = node.obfuscated_child(segment) or node.obfuscated_class(segment)
            else:
                node = node.obfuscated_class(segment)
        if node is None:
            return None
        return node.obfuscated_class(class_segment)

    def path_for_class(self, identifier: str) -> Optional[str]:
        """
        Return the located source path of a class.

        Args:
            identifier: Full class name, parts of which may be obfuscated.

        Returns:
            Optional[str]: Path relative to the project root, if known.
        """
        cl = self.obfuscated_class(identifier)
        return cl.path if cl else None

    # ==========================================================================
    # ALIAS REGISTRATION
    # ==========================================================================

    def add_package_alias(self, name: str, obfuscation: str) -> Node:
        """
        Associate a full package name with the obfuscation of its last segment.

        Raises:
            ObfuscationCollisionError: If a sibling package already uses it.
        """
        pkg = self.package(name)
        pkg.obfuscation = obfuscation
        return pkg

    def add_class_alias(self, name: str, obfuscation: str) -> Node:
        """Associate a full class name with the obfuscation of its last segment."""
        cl = self.klass(name)
        cl.obfuscation = obfuscation
        return cl

    def add_method_alias(
            self,
            class_or_name: Union[JavaClass, str],
            signature: str,
            obfuscation: str,
    ) -> Method:
        """
        Associate a method with an obfuscated name.

        Args:
            class_or_name: The owning class, or its full cleartext name.
            signature: Cleartext signature, e.g. "com.foo.Type1 doIt(int[])".
            obfuscation: The obfuscated method name.

        Returns:
            Method: The (possibly newly created) method.

        Raises:
            ObfuscationCollisionError: If another method of the class with the
                same argument list already carries `obfuscation`.
        """
        cl = self._resolve_class(class_or_name)
        outcome, meth = self._register_method(cl, signature, obfuscation)
        if outcome is AliasOutcome.DUPLICATE:
            raise ObfuscationCollisionError(obfuscation, repr(meth), f"{cl.full_name}#{signature}")
        return meth

    def register_method_alias(
            self,
            class_or_name: Union[JavaClass, str],
            signature: str,
            obfuscation: str,
    ) -> AliasOutcome:
        """
        Fallible variant of `add_method_alias` that reports collisions.

        A colliding registration leaves the tree untouched: the method that
        already owns the obfuscation keeps it and no new method is created.
        """
        cl = self._resolve_class(class_or_name)
        outcome, _ = self._register_method(cl, signature, obfuscation)
        return outcome

    # ==========================================================================
    # TYPES, METHODS AND ARGUMENTS
    # ==========================================================================

    def java_type(self, name: str) -> TypeNode:
        """**Find or create** a primitive or class type by its cleartext name."""
        return find_primitive(name) or self.klass(name)

    def obfuscated_type(self, name: str) -> Optional[JavaType]:
        """**Find** a primitive, or a class by its obfuscated name."""
        return find_primitive(name) or self.obfuscated_class(name)

    def argument(self, descriptor: str) -> Argument:
        """**Find or create** the type of `descriptor` and wrap it in a new Argument."""
        type_name, dimensionality = split_descriptor(descriptor)
        return Argument(self.java_type(type_name), dimensionality)

    def obfuscated_argument(self, descriptor: str) -> Optional[Argument]:
        """Build an Argument from an obfuscated descriptor; None for unknown types."""
        type_name, dimensionality = split_descriptor(descriptor)
        java_type = self.obfuscated_type(type_name)
        if java_type is None:
            return None
        return Argument(java_type, dimensionality)

    def java_method(self, klass: JavaClass, signature: str) -> Method:
        """
        **Find or create** a method from its cleartext signature.

        Overloads are separate methods: two methods may share a name as long as
        their argument lists differ.
        """
        parsed = parse_signature(signature)
        args = [self.argument(d) for d in parsed.argument_descriptors]
        existing = klass.find_method(parsed.name, args)
        if existing is not None:
            return existing
        return klass.create_method(parsed.name, self.argument(parsed.return_descriptor), args)

    def obfuscated_method(self, klass: JavaClass, signature: str) -> Optional[Method]:
        """
        **Find** a method from its obfuscated signature.

        Args:
            klass: The class owning the method.
            signature: Signature with obfuscated method and type names,
                e.g. "com.foo.A a(com.foo.B, int[])".

        Returns:
            Optional[Method]: The match, or None (also when a type is unknown).
        """
        parsed = parse_signature(signature)
        args = [self.obfuscated_argument(d) for d in parsed.argument_descriptors]
        if any(arg is None for arg in args):
            return None
        return klass.method_with_obfuscation(parsed.name, args)

    # ==========================================================================
    # ENUMERATION AND FILE LOCATION
    # ==========================================================================

    def iter_packages(self) -> Iterator[Package]:
        """Yield every package, parents before children."""
        stack = list(reversed(self.package_roots))
        while stack:
            pkg = stack.pop()
            yield pkg
            stack.extend(reversed(pkg.children))

    def iter_classes(self) -> Iterator[JavaClass]:
        """Yield every class, including inner classes."""
        for pkg in self.iter_packages():
            stack = list(reversed(pkg.classes))
            while stack:
                cl = stack.pop()
                yield cl
                stack.extend(reversed(cl.classes))

    def iter_methods(self) -> Iterator[Method]:
        for cl in self.iter_classes():
            yield from cl.java_methods

    def find_files(self, root: str) -> int:
        """
        Attach source paths to the classes of this namespace.

        Args:
            root: Project root; all source directories must be under it.

        Returns:
            int: Number of classes that received a path.
        """
        from deobfuscator4j.core.services.locator import locate_sources
        return locate_sources(root, self)

    # ==========================================================================
    # PRIVATE HELPERS
    # ==========================================================================

    def _create_root(self, name: str) -> Package:
        pkg = Package(name)
        self._package_roots[name] = pkg
        return pkg

    def _obfuscated_root(self, segment: str) -> Optional[Package]:
        for pkg in self._package_roots.values():
            if pkg.obfuscation == segment:
                return pkg
        return self._package_roots.get(segment)

    def _resolve_class(self, class_or_name: Union[JavaClass, str]) -> JavaClass:
        if isinstance(class_or_name, JavaClass):
            return class_or_name
        node = self.klass(class_or_name)
        if not isinstance(node, JavaClass):
            raise IdentifierStructureError(
                class_or_name, class_or_name.split(".")[-1], "does not name a class"
            )
        return node

    def _register_method(
            self,
            cl: JavaClass,
            signature: str,
            obfuscation: str,
    ) -> Tuple[AliasOutcome, Method]:
        parsed = parse_signature(signature)
        args = [self.argument(d) for d in parsed.argument_descriptors]

        holder = cl.method_with_obfuscation(obfuscation, args)
        existing = cl.find_method(parsed.name, args)
        if holder is not None and holder is not existing:
            logger.debug(f"Obfuscation {obfuscation!r} already taken by {holder!r}; "
                         f"ignoring {cl.full_name}#{signature}")
            return AliasOutcome.DUPLICATE, holder

        meth = existing or cl.create_method(parsed.name, self.argument(parsed.return_descriptor), args)
        meth.obfuscation = obfuscation
        return AliasOutcome.REGISTERED, meth

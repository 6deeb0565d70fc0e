from __future__ import annotations

"""
Unit tests for the Namespace registry.

Verifies:
1. Find-or-create descent and the casing heuristic.
2. Alias registration for packages, classes and methods.
3. Obfuscated resolution of packages, classes, types and methods.
4. Duplicate method obfuscations (bridge methods).
"""

import pytest

from deobfuscator4j.core.namespace import AliasOutcome, Namespace
from deobfuscator4j.domain.errors import (
    IdentifierStructureError,
    ObfuscationCollisionError,
    SignatureSyntaxError,
)
from deobfuscator4j.domain.java_models import JavaClass, Package
from deobfuscator4j.domain.java_types import find_primitive


@pytest.fixture
def namespace() -> Namespace:
    return Namespace()


# -----------------------------------------------------------------------------
# FIND-OR-CREATE
# -----------------------------------------------------------------------------

def test_package_creates_intermediate_nodes(namespace: Namespace) -> None:
    """TC-01: Verify package lookup builds missing packages once."""
    bar = namespace.package("com.foo.bar")

    assert isinstance(bar, Package)
    assert bar.full_name == "com.foo.bar"
    assert namespace.package("com.foo.bar") is bar
    assert [p.name for p in namespace.package_roots] == ["com"]


def test_klass_reads_casing(namespace: Namespace) -> None:
    """TC-02: Verify uppercase segments become classes, nested when consecutive."""
    inner = namespace.klass("com.foo.Outer.Inner")

    assert isinstance(inner, JavaClass)
    assert isinstance(inner.parent, JavaClass)
    assert inner.parent.full_name == "com.foo.Outer"


def test_package_segment_after_class_is_rejected(namespace: Namespace) -> None:
    """TC-03: Verify a class cannot contain a package."""
    with pytest.raises(IdentifierStructureError, match="after a class"):
        namespace.klass("com.Foo.bar")


def test_single_segment_is_a_root_package(namespace: Namespace) -> None:
    """TC-04: Verify the first segment is always a package."""
    node = namespace.klass("Wallpaperer")
    assert isinstance(node, Package)
    assert node.parent is None


def test_find_operations_do_not_mutate(namespace: Namespace) -> None:
    """TC-05: Verify find-only lookups return None and leave the tree alone."""
    assert namespace.find_package("com.foo") is None
    assert namespace.find_class("com.foo.Bar") is None
    assert namespace.package_roots == []

    cl = namespace.klass("com.foo.Bar")
    assert namespace.find_class("com.foo.Bar") is cl
    assert namespace.find_class("com.foo") is None


# -----------------------------------------------------------------------------
# ALIAS REGISTRATION
# -----------------------------------------------------------------------------

def test_add_package_alias(namespace: Namespace) -> None:
    """TC-06: Verify package alias registration."""
    pkg = namespace.add_package_alias("com.foo.bar", "A")

    assert isinstance(pkg, Package)
    assert pkg.name == "bar"
    assert pkg.parent.full_name == "com.foo"
    assert pkg.obfuscation == "A"


def test_add_package_alias_collision(namespace: Namespace) -> None:
    """TC-07: Verify sibling packages may not share an obfuscation."""
    namespace.add_package_alias("com.foo.bar", "A")
    with pytest.raises(ObfuscationCollisionError):
        namespace.add_package_alias("com.foo.baz", "A")

    # Non-siblings are fine
    namespace.add_package_alias("com.other.baz", "A")


def test_add_class_alias(namespace: Namespace) -> None:
    """TC-08: Verify class alias registration."""
    cl = namespace.add_class_alias("com.foo.Bar", "A")

    assert isinstance(cl, JavaClass)
    assert cl.name == "Bar"
    assert isinstance(cl.parent, Package)
    assert cl.parent.full_name == "com.foo"
    assert cl.obfuscation == "A"


def test_add_method_alias(namespace: Namespace) -> None:
    """TC-09: Verify method alias registration resolves every type."""
    cl = namespace.add_class_alias("com.foo.Bar", "A")
    meth = namespace.add_method_alias(cl, "com.foo.Bar finagle(com.foo.Bar, int[])", "a")

    assert meth.name == "finagle"
    assert meth.obfuscation == "a"
    assert meth.klass is cl
    assert meth.return_type.type is cl
    assert len(meth.arguments) == 2
    assert meth.arguments[0].type.full_name == "com.foo.Bar"
    assert meth.arguments[0].is_array is False
    assert meth.arguments[1].type is find_primitive("int")
    assert meth.arguments[1].is_array is True


def test_add_method_alias_by_class_name(namespace: Namespace) -> None:
    """TC-10: Verify the owning class may be given by name."""
    meth = namespace.add_method_alias("com.foo.Bar", "int baz(int[])", "a")
    assert meth.klass is namespace.find_class("com.foo.Bar")


def test_add_method_alias_on_package_name_is_rejected(namespace: Namespace) -> None:
    """TC-11: Verify a method cannot be attached to a package."""
    with pytest.raises(IdentifierStructureError, match="does not name a class"):
        namespace.add_method_alias("com.foo.bar", "int baz()", "a")


def test_add_method_alias_malformed_signature(namespace: Namespace) -> None:
    """TC-12: Verify signature errors propagate."""
    with pytest.raises(SignatureSyntaxError):
        namespace.add_method_alias("com.foo.Bar", "not a signature", "a")


def test_duplicate_method_obfuscation(namespace: Namespace) -> None:
    """TC-13: Verify bridge-method duplicates keep the first mapping."""
    cl = namespace.klass("com.foo.Bar")
    first = namespace.add_method_alias(cl, "int compare(java.lang.Object, java.lang.Object)", "a")

    outcome = namespace.register_method_alias(
        cl, "int compareTyped(java.lang.Object, java.lang.Object)", "a"
    )
    assert outcome is AliasOutcome.DUPLICATE
    assert cl.java_methods == [first]

    with pytest.raises(ObfuscationCollisionError):
        namespace.add_method_alias(cl, "int compareTyped(java.lang.Object, java.lang.Object)", "a")


def test_method_registration_is_idempotent(namespace: Namespace) -> None:
    """TC-14: Verify re-registering the same mapping changes nothing."""
    cl = namespace.klass("com.foo.Bar")
    first = namespace.add_method_alias(cl, "void run(int)", "a")

    assert namespace.register_method_alias(cl, "void run(int)", "a") is AliasOutcome.REGISTERED
    assert cl.java_methods == [first]


# -----------------------------------------------------------------------------
# OBFUSCATED RESOLUTION
# -----------------------------------------------------------------------------

def test_obfuscated_package_and_class(namespace: Namespace) -> None:
    """TC-15: Verify fully and partially obfuscated lookups."""
    namespace.add_package_alias("com.foo", "A")
    bar = namespace.add_class_alias("com.foo.Bar", "B")

    assert namespace.obfuscated_package("com.A").full_name == "com.foo"
    assert namespace.obfuscated_package("com.foo").full_name == "com.foo"
    assert namespace.obfuscated_class("com.A.B") is bar
    assert namespace.obfuscated_class("com.foo.B") is bar
    assert namespace.obfuscated_class("com.A.Bar") is bar


def test_obfuscated_lookups_return_none_when_absent(namespace: Namespace) -> None:
    """TC-16: Verify unknown segments yield None."""
    namespace.add_class_alias("com.foo.Bar", "B")

    assert namespace.obfuscated_package("org.foo") is None
    assert namespace.obfuscated_package("com.zzz") is None
    assert namespace.obfuscated_class("com.foo.Z") is None
    assert namespace.obfuscated_class("com.zzz.B") is None
    assert namespace.obfuscated_class("B") is None


def test_obfuscated_inner_class(namespace: Namespace) -> None:
    """TC-17: Verify inner classes resolve through their outer class."""
    namespace.add_class_alias("com.foo.Outer", "A")
    inner = namespace.add_class_alias("com.foo.Outer.Inner", "B")
    assert namespace.obfuscated_class("com.foo.A.B") is inner


def test_obfuscated_type(namespace: Namespace) -> None:
    """TC-18: Verify primitives and obfuscated classes both resolve."""
    bar = namespace.add_class_alias("com.foo.Bar", "A")

    assert namespace.obfuscated_type("int") is find_primitive("int")
    assert namespace.obfuscated_type("com.foo.A") is bar
    assert namespace.obfuscated_type("com.foo.Q") is None


def test_java_type_find_or_create(namespace: Namespace) -> None:
    """TC-19: Verify cleartext type lookup creates classes on demand."""
    assert namespace.java_type("boolean") is find_primitive("boolean")
    created = namespace.java_type("com.foo.Bar")
    assert isinstance(created, JavaClass)
    assert namespace.java_type("com.foo.Bar") is created


def test_obfuscated_method(namespace: Namespace) -> None:
    """TC-20: Verify method lookup by obfuscated name and argument types."""
    meth = namespace.add_method_alias("com.foo.Bar", "int baz(int[])", "a")
    cl = namespace.klass("com.foo.Bar")

    assert namespace.obfuscated_method(cl, "int a(int[])") is meth
    assert namespace.obfuscated_method(cl, "int a()") is None
    assert namespace.obfuscated_method(cl, "int a(int)") is None
    assert namespace.obfuscated_method(cl, "int b(int[])") is None


def test_obfuscated_method_with_obfuscated_argument_types(namespace: Namespace) -> None:
    """TC-21: Verify argument types are resolved through their obfuscation."""
    namespace.add_class_alias("com.foo.Widget", "W")
    meth = namespace.add_method_alias("com.foo.Bar", "void paint(com.foo.Widget)", "p")
    cl = namespace.klass("com.foo.Bar")

    assert namespace.obfuscated_method(cl, "void p(com.foo.W)") is meth
    assert namespace.obfuscated_method(cl, "void p(com.foo.Unknown)") is None


def test_java_method_find_or_create(namespace: Namespace) -> None:
    """TC-22: Verify java_method returns the existing overload when present."""
    cl = namespace.klass("com.foo.Bar")
    meth = namespace.java_method(cl, "void run(int)")

    assert namespace.java_method(cl, "void run(int)") is meth
    assert namespace.java_method(cl, "void run(long)") is not meth
    assert meth.obfuscation is None


def test_path_for_class(namespace: Namespace) -> None:
    """TC-23: Verify located paths are reachable by obfuscated name."""
    cl = namespace.add_class_alias("com.foo.Bar", "A")
    cl.path = "src/com/foo/Bar.java"

    assert namespace.path_for_class("com.foo.A") == "src/com/foo/Bar.java"
    assert namespace.path_for_class("com.foo.Bar") == "src/com/foo/Bar.java"
    assert namespace.path_for_class("com.foo.Missing") is None


def test_enumeration(namespace: Namespace) -> None:
    """TC-24: Verify packages, classes and methods are enumerated."""
    namespace.add_method_alias("com.foo.Bar", "void run()", "a")
    namespace.klass("com.foo.Bar.Inner")
    namespace.package("org.baz")

    assert [p.full_name for p in namespace.iter_packages()] == ["com", "com.foo", "org", "org.baz"]
    assert [c.full_name for c in namespace.iter_classes()] == ["com.foo.Bar", "com.foo.Bar.Inner"]
    assert [m.name for m in namespace.iter_methods()] == ["run"]

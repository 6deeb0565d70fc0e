from __future__ import annotations

"""
Unit tests for the source file locator.

Verifies:
1. Path assignment relative to the project root.
2. Pruning of hidden directories.
3. Path-component-aware suffix matching and last-match-wins.
4. Idempotency and targeting of single packages or classes.
"""

from pathlib import Path

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.core.services.locator import locate_sources, yield_source_files


def _touch(root: Path, *rel_paths: str) -> None:
    for rel in rel_paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def _sample_namespace() -> Namespace:
    ns = Namespace()
    ns.add_class_alias("foo.Bar", "A")
    ns.add_class_alias("foo.Baz", "B")
    return ns


def test_find_files_sets_class_paths(tmp_path: Path) -> None:
    """TC-01: Verify classes get root-relative paths and hidden dirs are skipped."""
    _touch(
        tmp_path,
        ".backup/foo/Bar.java",
        "lib/foo/Bar.jar",
        "lib/foo/Baz.jar",
        "source1/foo/Bar.java",
        "source2/foo/Baz.java",
    )
    ns = _sample_namespace()

    assert ns.find_files(str(tmp_path)) == 2
    assert ns.path_for_class("foo.Bar") == "source1/foo/Bar.java"
    assert ns.path_for_class("foo.Baz") == "source2/foo/Baz.java"


def test_nested_hidden_directories_are_pruned(tmp_path: Path) -> None:
    """TC-02: Verify hidden directories below the root are never entered."""
    _touch(tmp_path, "src/.svn/foo/Bar.java", "src/.idea/x.xml", "src/main/Keep.java")

    assert list(yield_source_files(str(tmp_path))) == ["src/main/Keep.java"]


def test_suffix_must_align_with_path_components(tmp_path: Path) -> None:
    """TC-03: Verify 'xfoo/Bar.java' does not match class foo.Bar."""
    _touch(tmp_path, "src/xfoo/Bar.java")
    ns = _sample_namespace()

    assert locate_sources(str(tmp_path), ns) == 0
    assert ns.path_for_class("foo.Bar") is None


def test_last_match_wins(tmp_path: Path) -> None:
    """TC-04: Verify the last file in sorted traversal order is kept."""
    _touch(tmp_path, "a/foo/Bar.java", "b/foo/Bar.java")
    ns = _sample_namespace()

    locate_sources(str(tmp_path), ns)
    assert ns.path_for_class("foo.Bar") == "b/foo/Bar.java"


def test_file_at_root_of_project(tmp_path: Path) -> None:
    """TC-05: Verify a path equal to the subpath matches."""
    _touch(tmp_path, "foo/Bar.java")
    ns = _sample_namespace()

    locate_sources(str(tmp_path), ns)
    assert ns.path_for_class("foo.Bar") == "foo/Bar.java"


def test_inner_classes_use_outer_file(tmp_path: Path) -> None:
    """TC-06: Verify inner classes are located in their outer class's file."""
    _touch(tmp_path, "src/foo/Outer.java")
    ns = Namespace()
    inner = ns.klass("foo.Outer.Inner")

    assert locate_sources(str(tmp_path), ns) == 2
    assert inner.path == "src/foo/Outer.java"


def test_single_target(tmp_path: Path) -> None:
    """TC-07: Verify a single class or package can be located alone."""
    _touch(tmp_path, "src/foo/Bar.java", "src/foo/Baz.java")
    ns = _sample_namespace()
    bar = ns.find_class("foo.Bar")

    assert locate_sources(str(tmp_path), bar) == 1
    assert ns.path_for_class("foo.Baz") is None

    assert locate_sources(str(tmp_path), ns.find_package("foo")) == 2
    assert ns.path_for_class("foo.Baz") == "src/foo/Baz.java"


def test_locating_twice_is_stable(tmp_path: Path) -> None:
    """TC-08: Verify repeated runs assign identical paths."""
    _touch(tmp_path, "one/foo/Bar.java", "two/foo/Baz.java")
    ns = _sample_namespace()

    locate_sources(str(tmp_path), ns)
    first = [c.path for c in ns.iter_classes()]
    locate_sources(str(tmp_path) + "/", ns)
    assert [c.path for c in ns.iter_classes()] == first

from __future__ import annotations

"""
Source File Locator.

Best-effort search for the `.java` file that defines each class of a
Namespace. A class `com.foo.bar.Baz` is expected in a file whose path ends
with `com/foo/bar/Baz.java` somewhere under the project root; inner classes
resolve to the file of their outermost enclosing class.
"""

import logging
import os
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Union

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.domain.java_models import JavaClass, Package

logger = logging.getLogger(__name__)

Target = Union[Namespace, Package, JavaClass]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def locate_sources(root: str, target: Target) -> int:
    """
    Assign a root-relative source path to every class under `target`.

    The project tree is walked once in sorted order; hidden directories are
    never entered. When several files match a class, the last one visited
    wins.

    Args:
        root: Project root directory.
        target: A whole Namespace, a single Package (recursively), or a
                single JavaClass.

    Returns:
        int: Number of classes that were assigned a path.
    """
    root_abs = os.path.abspath(root)
    files_by_name = _index_by_file_name(yield_source_files(root_abs))

    located = 0
    for cl in _classes_under(target):
        match = _last_match(cl.subpath, files_by_name)
        if match is not None:
            cl.path = match
            located += 1

    logger.info(f"Located source files for {located} classes under {root_abs}")
    return located


def yield_source_files(root: str) -> Iterator[str]:
    """
    Walk `root` and yield every file path relative to it, `/`-separated.

    Directories whose name begins with "." are pruned at any depth.
    """
    root_abs = os.path.abspath(root)
    for dir_path, dirs, files in os.walk(root_abs):
        # In-place pruning keeps os.walk out of hidden directories
        dirs[:] = [d for d in dirs if not d.startswith(".")]
        dirs.sort()
        files.sort()

        for file_name in files:
            rel_path = os.path.relpath(os.path.join(dir_path, file_name), root_abs)
            yield rel_path.replace(os.sep, "/")


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _classes_under(target: Target) -> Iterator[JavaClass]:
    if isinstance(target, Namespace):
        for pkg in target.package_roots:
            yield from _classes_under(pkg)
    elif isinstance(target, Package):
        for cl in target.classes:
            yield from _classes_under(cl)
        for pkg in target.children:
            yield from _classes_under(pkg)
    else:
        yield target
        for inner in target.classes:
            yield from _classes_under(inner)


def _index_by_file_name(rel_paths: Iterator[str]) -> Dict[str, List[str]]:
    """Group paths by base name, keeping traversal order within each group."""
    index: Dict[str, List[str]] = defaultdict(list)
    for rel_path in rel_paths:
        index[rel_path.rsplit("/", 1)[-1]].append(rel_path)
    logger.debug(f"Indexed {sum(len(v) for v in index.values())} candidate files")
    return index


def _last_match(subpath: str, files_by_name: Dict[str, List[str]]) -> Optional[str]:
    """Return the last path equal to `subpath` or ending in `/<subpath>`."""
    suffix = "/" + subpath
    found = None
    for rel_path in files_by_name.get(subpath.rsplit("/", 1)[-1], ()):
        if rel_path == subpath or rel_path.endswith(suffix):
            found = rel_path
    return found

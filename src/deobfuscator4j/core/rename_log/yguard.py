from __future__ import annotations

"""
yGuard Rename Log Parser.

Reads the XML log yGuard writes next to an obfuscated jar:

    <yguard version="1.5">
      <expose>
        <class name="com.foo.Main"/>
      </expose>
      <map>
        <package name="com.foo.util" map="A"/>
        <class name="com.foo.util.Helper" map="B"/>
        <method class="com.foo.util.Helper" name="void run(int[])" map="C"/>
      </map>
    </yguard>

Every `map` attribute holds the obfuscation of the last name segment only.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, Optional

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.domain.errors import MappingSyntaxError

logger = logging.getLogger(__name__)

_INNER_CLASS_SEPARATOR = "$"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_yguard(log_path: str) -> Namespace:
    """
    Build a Namespace from a yGuard XML rename log.

    Args:
        log_path: Path to the `.xml` log.

    Returns:
        Namespace: The populated namespace.

    Raises:
        MappingSyntaxError: If the document is not well-formed XML or an
            entry lacks a required attribute.
        ObfuscationCollisionError: If two siblings share an obfuscation.
        SignatureSyntaxError: If a method entry has a malformed signature.
    """
    try:
        document = ET.parse(log_path)
    except ET.ParseError as e:
        raise MappingSyntaxError(f"Malformed yGuard log '{log_path}': {e}") from e

    namespace = Namespace()
    counters = {"package": 0, "class": 0, "method": 0, "expose": 0}

    for section in _yguard_sections(document.getroot(), "map"):
        for element in section:
            if element.tag not in ("package", "class", "method"):
                continue
            name = _required(element, "name")
            obfuscation = _required(element, "map")
            if element.tag == "package":
                namespace.add_package_alias(name, obfuscation)
            elif element.tag == "class":
                obfuscation = repair_inner_class_obfuscation(namespace, name, obfuscation)
                namespace.add_class_alias(name, obfuscation)
            elif element.tag == "method":
                namespace.add_method_alias(_required(element, "class"), name, obfuscation)
            counters[element.tag] += 1

    # Exposed classes keep their names but must still exist in the tree
    for section in _yguard_sections(document.getroot(), "expose"):
        for element in section.findall("class"):
            namespace.klass(_required(element, "name"))
            counters["expose"] += 1

    logger.info(
        f"Parsed yGuard log: {counters['package']} packages, {counters['class']} classes, "
        f"{counters['method']} methods, {counters['expose']} exposed classes"
    )
    return namespace


def repair_inner_class_obfuscation(namespace: Namespace, name: str, obfuscation: str) -> str:
    """
    Rebuild the obfuscation of a `$`-nested class.

    yGuard reports only the innermost segment: "com.foo.Outer$6" arrives
    with map="6" although the obfuscated class is "<Outer's alias>$6". The
    outer class's alias (or its cleartext name, when it has none) is
    prepended and interior `$` segments are kept as they are.

    Args:
        namespace: Namespace holding the already-parsed outer class.
        name: Full cleartext class name.
        obfuscation: The raw `map` attribute.

    Returns:
        str: The obfuscation to assign to the class.
    """
    package_name, _, simple_name = name.rpartition(".")
    if _INNER_CLASS_SEPARATOR not in simple_name:
        return obfuscation

    segments = simple_name.split(_INNER_CLASS_SEPARATOR)
    base_name = segments[0]
    base_class = namespace.find_class(f"{package_name}.{base_name}" if package_name else base_name)
    base_alias: Optional[str] = base_class.obfuscation if base_class else None

    return _INNER_CLASS_SEPARATOR.join([base_alias or base_name, *segments[1:-1], obfuscation])


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _yguard_sections(root: ET.Element, tag: str) -> Iterator[ET.Element]:
    """Yield every `<tag>` element directly below a `<yguard>` element."""
    for yguard in root.iter("yguard"):
        yield from yguard.findall(tag)


def _required(element: ET.Element, attr: str) -> str:
    value = element.get(attr)
    if not value:
        raise MappingSyntaxError(f"<{element.tag}> entry without '{attr}' attribute")
    return value

from __future__ import annotations

"""
Namespace Serialization.

Converts a populated Namespace into a JSON-compatible tree and into the
compressed payload the crash-reporting server expects
(base64 of zlib-deflated JSON).
"""

import base64
import json
import logging
import zlib
from typing import Any, Dict

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.domain.java_models import JavaClass, Method, Package

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def namespace_to_dict(namespace: Namespace) -> Dict[str, Any]:
    """
    Render the whole namespace as nested dictionaries.

    Args:
        namespace: The namespace to serialize.

    Returns:
        Dict[str, Any]: `{"packages": [...]}`, children in insertion order.
    """
    return {"packages": [_package_to_dict(pkg) for pkg in namespace.package_roots]}


def encode_namespace(namespace: Namespace) -> str:
    """
    Build the upload payload for a namespace.

    Returns:
        str: ASCII base64 text of the deflated, compact JSON document.
    """
    document = json.dumps(namespace_to_dict(namespace), separators=(",", ":"))
    compressed = zlib.compress(document.encode("utf-8"))
    logger.debug(f"Serialized namespace: {len(document)} bytes JSON, {len(compressed)} bytes compressed")
    return base64.b64encode(compressed).decode("ascii")


def decode_namespace(payload: str) -> Dict[str, Any]:
    """Inverse of `encode_namespace`, returning the plain dictionary tree."""
    return json.loads(zlib.decompress(base64.b64decode(payload)).decode("utf-8"))


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _package_to_dict(pkg: Package) -> Dict[str, Any]:
    return {
        "name": pkg.name,
        "obfuscation": pkg.obfuscation,
        "packages": [_package_to_dict(child) for child in pkg.children],
        "classes": [_class_to_dict(cl) for cl in pkg.classes],
    }


def _class_to_dict(cl: JavaClass) -> Dict[str, Any]:
    return {
        "name": cl.name,
        "obfuscation": cl.obfuscation,
        "path": cl.path,
        "methods": [_method_to_dict(meth) for meth in cl.java_methods],
        "classes": [_class_to_dict(inner) for inner in cl.classes],
    }


def _method_to_dict(meth: Method) -> Dict[str, Any]:
    return {
        "name": meth.name,
        "obfuscation": meth.obfuscation,
        "return_type": str(meth.return_type),
        "arguments": [str(arg) for arg in meth.arguments],
    }

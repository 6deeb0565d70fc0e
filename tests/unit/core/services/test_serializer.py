from __future__ import annotations

"""
Unit tests for Namespace serialization.
"""

from deobfuscator4j.core.namespace import Namespace
from deobfuscator4j.core.services.serializer import (
    decode_namespace,
    encode_namespace,
    namespace_to_dict,
)


def _sample_namespace() -> Namespace:
    ns = Namespace()
    ns.add_package_alias("com.foo", "A")
    bar = ns.add_class_alias("com.foo.Bar", "B")
    bar.path = "src/com/foo/Bar.java"
    ns.add_method_alias(bar, "int[] widths(com.foo.Bar, long)", "a")
    ns.klass("com.foo.Bar.Inner")
    return ns


def test_namespace_to_dict_shape() -> None:
    """TC-01: Verify the nested package/class/method structure."""
    doc = namespace_to_dict(_sample_namespace())

    com = doc["packages"][0]
    assert com["name"] == "com"
    assert com["obfuscation"] is None
    assert com["classes"] == []

    foo = com["packages"][0]
    assert foo["name"] == "foo"
    assert foo["obfuscation"] == "A"
    assert foo["packages"] == []

    bar = foo["classes"][0]
    assert bar["name"] == "Bar"
    assert bar["obfuscation"] == "B"
    assert bar["path"] == "src/com/foo/Bar.java"
    assert bar["methods"] == [{
        "name": "widths",
        "obfuscation": "a",
        "return_type": "int[]",
        "arguments": ["com.foo.Bar", "long"],
    }]
    assert bar["classes"][0]["name"] == "Inner"
    assert bar["classes"][0]["path"] is None


def test_empty_namespace() -> None:
    """TC-02: Verify an empty namespace serializes to an empty package list."""
    assert namespace_to_dict(Namespace()) == {"packages": []}


def test_encoded_payload_decodes_to_dict() -> None:
    """TC-03: Verify the compressed payload carries the same document."""
    ns = _sample_namespace()
    payload = encode_namespace(ns)

    assert isinstance(payload, str)
    payload.encode("ascii")
    assert decode_namespace(payload) == namespace_to_dict(ns)

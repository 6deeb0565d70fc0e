from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the HTTP clients used to talk to the crash-reporting server.
"""

from deobfuscator4j.infra.network.squash_client import (
    build_release_payload,
    upload_deobfuscation,
)

__all__ = [
    "build_release_payload",
    "upload_deobfuscation",
]

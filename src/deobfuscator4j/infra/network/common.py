from __future__ import annotations

USER_AGENT = "Deobfuscator4J-Client/1.0.0"
DEFAULT_TIMEOUT = 60
DEOBFUSCATION_ENDPOINT = "/api/1.0/deobfuscation.json"

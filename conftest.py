"""Root conftest: pins the environment before metriker.config is imported.

Any METRIKER_* variables from the developer shell are dropped so tests see the
built-in defaults; .env.test only fills in what the shell leaves unset.
"""
from __future__ import annotations

import os
from pathlib import Path

for _name in [n for n in os.environ if n.startswith("METRIKER_")]:
    del os.environ[_name]

_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    for line in _env_test.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())

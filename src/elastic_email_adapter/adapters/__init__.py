"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (configuration, HTTP delivery, logging).

Contents:
    * :mod:`.config` - Layered configuration loading
    * :mod:`.elastic` - Elastic Email API delivery via httpx
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
"""

from __future__ import annotations

__all__: list[str] = []

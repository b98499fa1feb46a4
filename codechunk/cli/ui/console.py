# codechunk/cli/ui/console.py
"""
Shared Rich console and status symbols.
"""

from __future__ import annotations

import sys

from rich.console import Console

# Legacy Windows consoles cannot print the Unicode symbols
CAN_USE_UNICODE = sys.platform != "win32" or (sys.stdout.encoding or "").lower() in (
    "utf-8",
    "utf8",
)

CHECK = "✓" if CAN_USE_UNICODE else "[OK]"
CROSS = "✗" if CAN_USE_UNICODE else "[X]"
WARN = "⚠" if CAN_USE_UNICODE else "[!]"

console = Console()

__all__ = ["CAN_USE_UNICODE", "CHECK", "CROSS", "WARN", "console"]

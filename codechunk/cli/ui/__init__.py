# codechunk/cli/ui/__init__.py
from codechunk.cli.ui.console import CHECK, CROSS, WARN, console
from codechunk.cli.ui.progress import IngestProgress

__all__ = ["CHECK", "CROSS", "WARN", "console", "IngestProgress"]

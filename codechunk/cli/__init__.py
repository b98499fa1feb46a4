# codechunk/cli/__init__.py
from codechunk.cli.cli import app

__all__ = ["app"]

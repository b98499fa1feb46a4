# codechunk/core/__init__.py

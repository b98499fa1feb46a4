# codechunk/llm/__init__.py

# codechunk/llm/embedding/plugins/__init__.py

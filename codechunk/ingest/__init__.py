# codechunk/ingest/__init__.py

# codechunk/__main__.py
from codechunk.cli import app

if __name__ == "__main__":
    app(prog_name="codechunk")

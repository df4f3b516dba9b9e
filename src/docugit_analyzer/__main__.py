"""Allow ``python -m docugit_analyzer``."""

from .cli import app

if __name__ == "__main__":
    app()

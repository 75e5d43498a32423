"""Allow running as ``python -m elkalert``."""

from elkalert.cli import app

if __name__ == "__main__":
    app()

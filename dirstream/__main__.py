"""Allow running dirstream with `python -m dirstream`."""

from dirstream.cli import app

if __name__ == "__main__":
    app()

"""Entry point for ``python -m locref``."""

from locref.cli import cli

if __name__ == "__main__":
    cli()

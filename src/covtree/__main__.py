"""Allow ``python -m covtree``."""

from covtree.cli import cli

if __name__ == "__main__":
    cli()

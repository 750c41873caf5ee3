# hbswriter/main.py
"""Main entry point for the hbswriter CLI application."""

from hbswriter.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="hbswriter")

if __name__ == '__main__':
    entrypoint()

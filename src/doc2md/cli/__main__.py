"""doc2md CLI module entry point.

Enables running the CLI via: python -m doc2md.cli
"""

from doc2md.cli.main import cli

if __name__ == "__main__":
    cli()

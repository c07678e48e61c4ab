"""doc2md CLI commands."""

from doc2md.cli.commands.convert import convert_cmd
from doc2md.cli.commands.generate import generate_cmd

__all__ = [
    "convert_cmd",
    "generate_cmd",
]

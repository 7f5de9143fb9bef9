"""Commands layer - CLI facade over workflows."""

from tf_cli.commands.run import tf

__all__ = [
    "tf",
]

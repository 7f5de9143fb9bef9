"""Operations layer - atomic operations that return Result types."""

from tf_cli.operations.credentials import issue_credentials, verify_account
from tf_cli.operations.library import fetch_library, prepare_work_dir
from tf_cli.operations.templates import copy_templates, substitute, substitute_tree
from tf_cli.operations.zones import ZoneDirectory

__all__ = [
    # library
    "fetch_library",
    "prepare_work_dir",
    # zones
    "ZoneDirectory",
    # credentials
    "issue_credentials",
    "verify_account",
    # templates
    "copy_templates",
    "substitute",
    "substitute_tree",
]

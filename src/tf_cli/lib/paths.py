"""Project-relative paths for the tf wrapper.

Layout under a project root:

    .tf.env                      persisted settings
    .tf/                         scratch workspace
    .tf/lib/                     fetched library
    .tf/config/<configuration>/  working directory for terraform
"""

from pathlib import Path

SETTINGS_FILE = ".tf.env"
SCRATCH_DIR = ".tf"


def settings_file(root: Path) -> Path:
    """<root>/.tf.env"""
    return root / SETTINGS_FILE


def scratch_dir(root: Path) -> Path:
    """<root>/.tf/"""
    return root / SCRATCH_DIR


def library_dir(root: Path) -> Path:
    """<root>/.tf/lib/"""
    return scratch_dir(root) / "lib"


def work_dir(root: Path, configuration: str) -> Path:
    """<root>/.tf/config/<configuration>/"""
    return scratch_dir(root) / "config" / configuration


def backend_file(root: Path, configuration: str) -> Path:
    """Generated backend declaration inside the work dir."""
    return work_dir(root, configuration) / "backend.tf"

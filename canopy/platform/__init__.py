"""Filesystem and subprocess helpers."""

from .files import atomic_write_text, copy_tree, remove_tree
from .process import ProcessError, run

__all__ = ["ProcessError", "atomic_write_text", "copy_tree", "remove_tree", "run"]

"""Site building: components, page rendering and output."""

from .page import Page, output_path, write_pages
from .site import Site, clean_dist_dir, needs_context
from .workspace import build_workspace, build_workspace_index, write_workspace_index

__all__ = [
    "Page",
    "Site",
    "build_workspace",
    "build_workspace_index",
    "clean_dist_dir",
    "needs_context",
    "output_path",
    "write_pages",
    "write_workspace_index",
]

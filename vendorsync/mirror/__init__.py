"""
Tree mirroring — full destructive replacement of one directory tree by another.
"""

from .tree import check_overlap, mirror_tree, remove_path

__all__ = ["check_overlap", "mirror_tree", "remove_path"]

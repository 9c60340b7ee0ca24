"""
Utilities package for pelican2hugo.

- fs: Post discovery and file output

Import commonly-used utilities directly from this package:
    from pelican2hugo.utils import find_post_files
"""

from .fs import find_post_files, has_front_matter, write_if_changed

__all__ = ["find_post_files", "has_front_matter", "write_if_changed"]

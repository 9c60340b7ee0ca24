"""
Post data structures for the Pelican → Hugo conversion.
"""
from pelican2hugo.dataclasses.post_entry import FrontMatter, PostEntry

__all__ = ["FrontMatter", "PostEntry"]

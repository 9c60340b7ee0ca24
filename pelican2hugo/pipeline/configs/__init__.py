#!/usr/bin/env python3
"""
Pipeline configuration modules.

This package contains declarative configuration for the conversion pipeline:
- defaults: parsing defaults, shortcode styles and remote media settings
"""

from pelican2hugo.pipeline.configs.defaults import (
    DEFAULT_AUTHOR,
    DEFAULT_EMBED_STYLE,
    EMBED_STYLES,
    GIPHY_API_KEY_ENV,
    POST_PATTERN,
    SOURCE_TZ,
)

__all__ = [
    "DEFAULT_AUTHOR",
    "DEFAULT_EMBED_STYLE",
    "EMBED_STYLES",
    "GIPHY_API_KEY_ENV",
    "POST_PATTERN",
    "SOURCE_TZ",
]

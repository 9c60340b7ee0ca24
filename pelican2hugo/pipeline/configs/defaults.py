#!/usr/bin/env python3
"""
defaults.py
-----------
Conversion defaults shared by the parser, the rewriter and the CLI.

This module defines:
- Header parsing defaults (author, source timezone, date format)
- Shortcode rendering styles for the target site
- Remote media lookup endpoints, credentials and HTTP settings

These definitions are used by:
- pelican2hugo/pipeline/header_parser.py
- pelican2hugo/pipeline/body_rewriter.py
- pelican2hugo/pipeline/resolvers.py
- pelican2hugo/pipeline/cli/ for option defaults
"""
from __future__ import annotations

from datetime import timedelta, timezone
from typing import Dict


# =============================================================================
# HEADER PARSING
# =============================================================================

DEFAULT_AUTHOR = "marvin"

# Pelican dates carry no offset; they are read as Central European Time.
SOURCE_TZ = timezone(timedelta(hours=1), "CET")
SOURCE_DATE_FORMAT = "%Y-%m-%d %H:%M"

POST_PATTERN = "*.md"

# Opening delimiter of a converted post
FRONT_MATTER_DELIMITER = "---"


# =============================================================================
# SHORTCODES
# =============================================================================

# Format strings for a Hugo shortcode call, keyed by style name.
# "percent" is the markdown-rendering form used by older site themes.
EMBED_STYLES: Dict[str, str] = {
    "angle": "{{{{< {name} {arg} >}}}}",
    "percent": "{{{{% {name} {arg} %}}}}",
}
DEFAULT_EMBED_STYLE = "angle"

REF_TEMPLATE = '{{{{< ref "{path}" >}}}}'


# =============================================================================
# REMOTE MEDIA
# =============================================================================

GIPHY_API_URL = "https://api.giphy.com/v1/gifs/{giphy_id}"
GIPHY_API_KEY_ENV = "GIPHY_API_KEY"
SOUNDCLOUD_OEMBED_URL = "https://soundcloud.com/oembed"

HTTP_TIMEOUT = 10.0
HTTP_MAX_RETRIES = 3
HTTP_RETRY_DELAY = 0.5
USER_AGENT = "pelican2hugo/1.0 python-requests"

#!/usr/bin/env python3
"""
body_rewriter.py
-------------------
Rewrite Pelican markup in a post body into Hugo syntax.

Passes, applied in this order to the output of the previous one:

    1. {% youtube ID %}              → {{< youtube ID >}}
    2. {% vimeo ID %}                → {{< vimeo ID >}}
    3. {% giphy ID %}                → [![source](gif url)](giphy page)   (resolver)
    4. {% soundcloud URL %}          → oEmbed HTML                         (resolver)
    5. ![alt]({static}/images/x.jpg) → ![alt](/images/x.jpg)
    6. [text]({static}/posts/x.md)   → [text]({{< ref "/posts/x.md" >}})

With the default "angle" style nothing a pass emits matches any of the
source patterns, so running the rewriter over converted text leaves it
unchanged. The "percent" style output still contains ``{% vimeo ... %}``
and must not be rewritten twice.

Programmatic API:
    from pelican2hugo.pipeline.body_rewriter import BodyRewriter, rewrite
    body = rewrite(body, resolver)
    body = BodyRewriter(resolver, embed_style="percent").rewrite(body)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Callable, Dict, List, Optional, Tuple

# --- Local imports ---
from pelican2hugo.core.exceptions import ConfigurationError
from pelican2hugo.core.logging_manager import ConversionLogger, safe_logger
from pelican2hugo.pipeline.configs.defaults import (
    DEFAULT_EMBED_STYLE,
    EMBED_STYLES,
    REF_TEMPLATE,
)
from pelican2hugo.pipeline.resolvers import MediaResolver


# ----- Patterns -----
YOUTUBE_RE = re.compile(r"\{%\syoutube\s(.+?)\s%\}")
VIMEO_RE = re.compile(r"\{%\svimeo\s(.+?)\s%\}")
GIPHY_RE = re.compile(r"\{%\sgiphy\s(.+?)\s%\}")
SOUNDCLOUD_RE = re.compile(r"\{%\ssoundcloud\s(.+?)\s%\}")
# Bracketed text may hold one nested [...] pair, e.g. the alt of a linked image
_BRACKET_TEXT = r"(?:[^\[\]\n]|\[[^\[\]\n]*\])"
STATIC_IMAGE_RE = re.compile(
    r"!\[(" + _BRACKET_TEXT + r"*)\]\(\{static\}(/images/[^)\n]+)\)"
)
STATIC_POST_LINK_RE = re.compile(
    r"\[(" + _BRACKET_TEXT + r"+)\]\(\{static\}(/[^)\n]*?\.md)\)"
)


class BodyRewriter:
    """
    Ordered set of rewrite passes over a post body.

    Attributes:
        resolver: Lookup used by the giphy and soundcloud passes
        embed_style: Key of EMBED_STYLES used for video shortcodes
    """

    def __init__(
        self,
        resolver: Optional[MediaResolver] = None,
        embed_style: str = DEFAULT_EMBED_STYLE,
        logger: Optional[ConversionLogger] = None,
    ) -> None:
        if embed_style not in EMBED_STYLES:
            raise ConfigurationError(
                f"Unknown embed style: '{embed_style}' "
                f"(expected one of {', '.join(sorted(EMBED_STYLES))})"
            )
        self.resolver = resolver
        self.embed_style = embed_style
        self.logger = logger
        self._embed_template = EMBED_STYLES[embed_style]

    def rewrite(self, body: str) -> str:
        """
        Run every pass over ``body`` and return the rewritten text.

        Raises:
            ConfigurationError: If a resolver-backed embed is found but no
                resolver was given
            ResolverError: If a remote lookup fails
        """
        giphy_cache: Dict[str, str] = {}
        soundcloud_cache: Dict[str, str] = {}

        passes: List[Tuple[str, re.Pattern[str], Callable[[re.Match[str]], str]]] = [
            ("youtube", YOUTUBE_RE, self._embed("youtube")),
            ("vimeo", VIMEO_RE, self._embed("vimeo")),
            ("giphy", GIPHY_RE, lambda m: self._giphy(m.group(1), giphy_cache)),
            (
                "soundcloud",
                SOUNDCLOUD_RE,
                lambda m: self._soundcloud(m.group(1), soundcloud_cache),
            ),
            ("image", STATIC_IMAGE_RE, _static_image),
            ("post_link", STATIC_POST_LINK_RE, _static_post_link),
        ]

        for name, pattern, replace in passes:
            body, count = pattern.subn(replace, body)
            if count:
                safe_logger(self.logger).log_debug(
                    f"Rewrote {count} {name} token(s)"
                )
        return body

    # ---- Replacements ----
    def _embed(self, name: str) -> Callable[[re.Match[str]], str]:
        template = self._embed_template
        return lambda m: template.format(name=name, arg=m.group(1))

    def _require_resolver(self, kind: str) -> MediaResolver:
        if self.resolver is None:
            raise ConfigurationError(
                f"Post contains a {kind} embed but no media resolver was configured"
            )
        return self.resolver

    def _giphy(self, giphy_id: str, cache: Dict[str, str]) -> str:
        if giphy_id not in cache:
            media = self._require_resolver("giphy").resolve_giphy(giphy_id)
            cache[giphy_id] = media.to_markdown()
        return cache[giphy_id]

    def _soundcloud(self, url: str, cache: Dict[str, str]) -> str:
        if url not in cache:
            cache[url] = self._require_resolver("soundcloud").resolve_soundcloud(url)
        return cache[url]


def _static_image(m: re.Match[str]) -> str:
    return f"![{m.group(1)}]({m.group(2)})"


def _static_post_link(m: re.Match[str]) -> str:
    return f"[{m.group(1)}](" + REF_TEMPLATE.format(path=m.group(2)) + ")"


def rewrite(body: str, resolver: Optional[MediaResolver] = None) -> str:
    """Rewrite ``body`` with the default embed style."""
    return BodyRewriter(resolver).rewrite(body)

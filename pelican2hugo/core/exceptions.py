#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the pelican2hugo project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the conversion pipeline.

Exception Hierarchy:
    Exception (built-in)
    ├── EntryParseError - Header/body extraction failures
    │   └── EmptyBodyError - No body text left after header extraction
    ├── ResolverError - Remote media lookup failures
    │   └── MissingCredentialError - Required API key not configured
    ├── ConfigurationError - Invalid converter configuration
    └── Pelican2HugoError - Batch conversion errors

Usage:
    from pelican2hugo.core.exceptions import EntryParseError, ResolverError

    try:
        entry = PostEntry.from_file(path, "marvin")
    except EntryParseError as e:
        logger.error(f"Cannot parse post: {e}")
"""


class EntryParseError(Exception):
    """
    Exception for post parsing failures.

    Raised when a Pelican source post cannot be turned into a PostEntry:
    - File not found or not readable
    - Encoding issues
    - Malformed Date header

    Pipeline Stage: source text → PostEntry (Step 1)

    Examples:
        >>> raise EntryParseError("Invalid date '2011-12-20' (expected YYYY-MM-DD HH:MM)")
        >>> raise EntryParseError("Cannot read post: posts/missing.md")
    """

    pass


class EmptyBodyError(EntryParseError):
    """
    Exception for posts without any body text.

    Raised when nothing remains of a post once header lines are removed and
    the single leading and trailing blank lines are trimmed.

    Examples:
        >>> raise EmptyBodyError("Post has no body after header extraction")
    """

    pass


class ResolverError(Exception):
    """
    Exception for remote media lookup failures.

    Raised by media resolvers when an embed cannot be expanded:
    - Network errors and timeouts (after retries)
    - Non-success HTTP status codes
    - Invalid JSON payloads
    - Missing fields in the payload

    Pipeline Stage: body → rewritten body (Step 2)

    Examples:
        >>> raise ResolverError("GIPHY lookup failed for 'xT9IgG50Fb7Mi0prBC'")
        >>> raise ResolverError("SoundCloud oEmbed response has no 'html' field")
    """

    pass


class MissingCredentialError(ResolverError):
    """
    Exception for a missing API credential.

    Raised the first time a resolver needs a key that was neither passed
    explicitly nor found in the environment.

    Examples:
        >>> raise MissingCredentialError("missing GIPHY API key")
    """

    pass


class ConfigurationError(Exception):
    """
    Exception for invalid converter configuration.

    Raised when the converter is set up in a way it cannot run with:
    - Unknown embed style
    - Resolver-backed embeds present but no resolver injected

    Examples:
        >>> raise ConfigurationError("Unknown embed style: 'square'")
    """

    pass


class Pelican2HugoError(Exception):
    """
    Exception for batch conversion errors.

    Raised when the batch itself cannot run, as opposed to a single post
    failing (those are reported per post):
    - Input directory not found
    - Output directory cannot be created

    Examples:
        >>> raise Pelican2HugoError("Input directory not found: content/posts")
    """

    pass

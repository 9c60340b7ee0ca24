"""
conftest.py
-----------
Shared pytest fixtures for pelican2hugo tests.

Provides fixtures for:
- Sample Pelican posts
- Temporary post directories
- A fake media resolver (no network)
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

from pelican2hugo.core.exceptions import ResolverError
from pelican2hugo.pipeline.resolvers import GiphyMedia


# ----- Path Fixtures -----

@pytest.fixture
def test_data_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def pelican_posts_dir(test_data_dir):
    """Path to sample Pelican posts."""
    return test_data_dir / "pelican_posts"


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def posts_dir(tmp_dir, pelican_posts_dir):
    """Writable copy of the sample posts."""
    target = tmp_dir / "posts"
    target.mkdir()
    for post in pelican_posts_dir.glob("*.md"):
        (target / post.name).write_text(post.read_text(encoding="utf-8"), encoding="utf-8")
    return target


# ----- Sample Content Fixtures -----

@pytest.fixture
def scenario_post():
    """Post with every header field except Author."""
    return "\n".join(
        [
            "Title: X",
            "Date: 2011-12-20 12:46",
            "Slug: x",
            "Tags: a, b",
            "",
            "Status: draft",
            "",
            "body line 1",
            "{% youtube ABC %}",
        ]
    )


# ----- Resolver Fixtures -----

class FakeResolver:
    """MediaResolver that answers from dictionaries and records calls."""

    def __init__(self, giphy=None, soundcloud=None):
        self.giphy = giphy or {}
        self.soundcloud = soundcloud or {}
        self.calls = []

    def resolve_giphy(self, giphy_id):
        self.calls.append(("giphy", giphy_id))
        if giphy_id not in self.giphy:
            raise ResolverError(f"unknown giphy id {giphy_id}")
        return self.giphy[giphy_id]

    def resolve_soundcloud(self, url):
        self.calls.append(("soundcloud", url))
        if url not in self.soundcloud:
            raise ResolverError(f"unknown soundcloud url {url}")
        return self.soundcloud[url]


@pytest.fixture
def fake_resolver():
    """Resolver that knows one GIF and one SoundCloud track."""
    return FakeResolver(
        giphy={
            "3o7TKSjRrfIPjeiVyM": GiphyMedia(
                image_url="https://media.giphy.com/media/3o7TKSjRrfIPjeiVyM/giphy.gif",
                page_url="https://giphy.com/gifs/3o7TKSjRrfIPjeiVyM",
                source="tumblr.com",
            )
        },
        soundcloud={
            "https://soundcloud.com/band/song": (
                '<iframe width="100%" height="400" scrolling="no" frameborder="no" '
                'src="https://w.soundcloud.com/player/?url=band%2Fsong"></iframe>'
            )
        },
    )

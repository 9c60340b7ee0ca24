"""
test_header_parser.py
---------------------
Unit tests for HeaderParser.

Tests classification of Pelican header lines, date conversion, tag
splitting, the author policy and body trimming.
"""
import pytest
from datetime import timedelta, timezone

from pelican2hugo.core.exceptions import EmptyBodyError, EntryParseError
from pelican2hugo.pipeline.header_parser import (
    HeaderParser,
    parse,
    parse_date,
    split_lines,
    split_tags,
)


class TestHeaderParserRealPosts:
    """Test parsing of complete sample posts."""

    def test_parse_1up_berlin(self, pelican_posts_dir):
        """Test the draft post with a single video."""
        text = (pelican_posts_dir / "1up-berlin.md").read_text(encoding="utf-8")
        entry = parse(text, "marvin")

        fm = entry.front_matter
        assert fm.title == "1UP berlin"
        assert fm.date == "2011-12-20T12:46:00+01:00"
        assert fm.slug == "1up-berlin"
        assert fm.tags == ["art", "berlin", "documentary", "graffiti"]
        assert fm.author == "marvin"
        assert fm.draft is True
        assert entry.body == (
            "Jeder der einmal durch Berlin gelaufen ist kennt sie.\n"
            "\n"
            "{% youtube QXxXoSTPivA %}"
        )

    def test_parse_published_post(self, pelican_posts_dir):
        """Test a post without Status line is not a draft."""
        text = (pelican_posts_dir / "zwei-neue-american-football-songs.md").read_text(
            encoding="utf-8"
        )
        entry = parse(text, "marvin")

        assert entry.front_matter.title == "Zwei neue American Football Songs"
        assert entry.front_matter.date == "2019-01-24T14:52:00+01:00"
        assert entry.front_matter.tags == ["americanfootball", "emo"]
        assert entry.front_matter.draft is False
        assert entry.body == (
            "Als ich als 16 jähriges LiveJournal Einträge durchforstete.\n"
            "\n"
            "{% youtube CaZUVZ2F_Dc %}\n"
            "\n"
            "{% youtube q1XUaXk92KA %}"
        )

    def test_parse_scenario_with_blank_between_headers(self, scenario_post):
        """Test blank lines between header lines do not reach the body."""
        entry = parse(scenario_post, "marvin")

        assert entry.front_matter.title == "X"
        assert entry.front_matter.date == "2011-12-20T12:46:00+01:00"
        assert entry.front_matter.slug == "x"
        assert entry.front_matter.tags == ["a", "b"]
        assert entry.front_matter.draft is True
        assert entry.body == "body line 1\n{% youtube ABC %}"


class TestHeaderClassification:
    """Test line-by-line classification rules."""

    def test_category_is_discarded(self):
        """Test Category lines are consumed without a trace."""
        entry = parse("Category: Kunst\n\ntext\n")
        assert "Kunst" not in entry.body
        assert entry.body == "text"

    def test_only_exact_draft_status(self):
        """Test only 'Status: draft' marks a draft."""
        entry = parse("Status: draft\n\ntext\n")
        assert entry.front_matter.draft is True

    def test_other_status_is_body_text(self):
        """Test a non-draft status line is not a header."""
        entry = parse("Status: published\n\ntext\n")
        assert entry.front_matter.draft is False
        assert entry.body.startswith("Status: published")

    def test_header_needs_space_after_colon(self):
        """Test 'Title:value' without whitespace is body text."""
        entry = parse("Title:NoSpace\n\ntext\n")
        assert entry.front_matter.title is None
        assert "Title:NoSpace" in entry.body

    def test_header_must_start_line(self):
        """Test indented header-like lines are body text."""
        entry = parse("Title: Real\n\n    Title: Code sample\n")
        assert entry.front_matter.title == "Real"
        assert entry.body == "    Title: Code sample"

    def test_later_title_overwrites(self):
        """Test the last Title line wins."""
        entry = parse("Title: First\nTitle: Second\n\ntext\n")
        assert entry.front_matter.title == "Second"

    def test_recurring_tags_replace_list(self):
        """Test a second Tags line replaces the first list wholesale."""
        entry = parse("Tags: a, b\nTags: c\n\ntext\n")
        assert entry.front_matter.tags == ["c"]

    def test_headers_anywhere_in_file(self):
        """Test header lines after body text are still consumed."""
        entry = parse("Title: X\n\ntext\nSlug: late-slug\nmore text\n")
        assert entry.front_matter.slug == "late-slug"
        assert entry.body == "text\nmore text"

    def test_missing_fields_stay_empty(self):
        """Test optional fields default to empty values."""
        entry = parse("just text\n")
        fm = entry.front_matter
        assert fm.title is None
        assert fm.slug is None
        assert fm.date is None
        assert fm.tags == []
        assert fm.draft is False


class TestAuthorPolicy:
    """Test the default/explicit author decision."""

    def test_default_author_without_header(self):
        """Test default author is used when no Author line exists."""
        entry = parse("Title: X\n\ntext\n", "marvin")
        assert entry.front_matter.author == "marvin"

    def test_explicit_author_survives_following_lines(self):
        """Test an Author line is kept even when other lines follow it."""
        entry = parse("Author: anna\nTitle: X\n\ntext\nmore text\n", "marvin")
        assert entry.front_matter.author == "anna"

    def test_last_author_line_wins(self):
        """Test the last Author line is used."""
        entry = parse("Author: anna\nAuthor: bert\n\ntext\n", "marvin")
        assert entry.front_matter.author == "bert"

    def test_author_line_at_end_of_file(self):
        """Test an Author line after the body is still used."""
        entry = parse("Title: X\n\ntext\nAuthor: carla\n", "marvin")
        assert entry.front_matter.author == "carla"
        assert entry.body == "text"


class TestDateParsing:
    """Test Date header conversion."""

    def test_winter_date_in_cet(self):
        """Test a winter date is rendered with +01:00."""
        assert parse_date("2011-12-20 12:46") == "2011-12-20T12:46:00+01:00"

    def test_summer_date_keeps_fixed_offset(self):
        """Test the source timezone is a fixed CET offset."""
        assert parse_date("2015-07-01 08:00") == "2015-07-01T08:00:00+01:00"

    def test_single_digit_fields_rejected(self):
        """Test every field needs its full width of digits."""
        with pytest.raises(EntryParseError):
            parse_date("2011-1-2 3:4")

    def test_custom_source_timezone(self):
        """Test HeaderParser honours a custom source timezone."""
        parser = HeaderParser("marvin", source_tz=timezone(timedelta(hours=-5)))
        entry = parser.parse("Date: 2020-01-02 03:04\n\ntext\n")
        assert entry.front_matter.date == "2020-01-02T03:04:00-05:00"

    @pytest.mark.parametrize(
        "value",
        [
            "2011-12-20",
            "20.12.2011 12:46",
            "2011-12-20 12:46:00",
            "2011-13-01 10:00",
            "2011-1-2 3:4",
            "2011-12-20 9:05",
            "2011-12-20  12:46",
            "tomorrow",
        ],
    )
    def test_malformed_date_raises(self, value):
        """Test anything but YYYY-MM-DD HH:MM is rejected."""
        with pytest.raises(EntryParseError) as exc_info:
            parse(f"Date: {value}\n\ntext\n")
        assert value in str(exc_info.value)


class TestTags:
    """Test tag list splitting."""

    def test_whitespace_stripped(self):
        """Test whitespace around and inside tags is removed."""
        assert split_tags("a, b,c") == ["a", "b", "c"]

    def test_internal_whitespace_removed(self):
        """Test spaces inside a tag are removed too."""
        assert split_tags("new york, street art") == ["newyork", "streetart"]

    def test_order_and_duplicates_kept(self):
        """Test order and duplicates are preserved."""
        assert split_tags("b, a, b") == ["b", "a", "b"]

    def test_empty_tokens_dropped(self):
        """Test trailing commas do not produce empty tags."""
        assert split_tags("a, , b,") == ["a", "b"]


class TestBodyTrimming:
    """Test leading/trailing blank line handling."""

    def test_only_one_leading_blank_removed(self):
        """Test only one of several separator lines is removed."""
        entry = parse("Title: X\n\n\ntext\n")
        assert entry.body == "\ntext"

    def test_only_one_trailing_blank_removed(self):
        """Test only one trailing blank line is removed."""
        entry = parse("Title: X\n\ntext\n\n\n")
        assert entry.body == "text\n"

    def test_body_without_separator(self):
        """Test a body directly after the header is kept whole."""
        entry = parse("Title: X\ntext\n")
        assert entry.body == "text"

    def test_inner_blank_lines_kept(self):
        """Test blank lines inside the body are preserved."""
        entry = parse("Title: X\n\na\n\n\nb\n")
        assert entry.body == "a\n\n\nb"

    def test_crlf_line_endings(self):
        """Test Windows line endings are handled."""
        entry = parse("Title: X\r\n\r\ntext\r\n")
        assert entry.front_matter.title == "X"
        assert entry.body == "text"

    def test_header_only_raises_empty_body(self):
        """Test a post without body lines fails with EmptyBodyError."""
        with pytest.raises(EmptyBodyError):
            parse("Title: X\nSlug: x\n")

    def test_blank_separators_only_raises_empty_body(self):
        """Test one leading plus one trailing blank line and nothing else."""
        with pytest.raises(EmptyBodyError) as exc_info:
            parse("Title: X\n\n\n")
        assert "body" in str(exc_info.value).lower()

    def test_single_blank_line_raises_empty_body(self):
        """Test a lone blank body line does not fault."""
        with pytest.raises(EmptyBodyError):
            parse("Title: X\n\n")

    def test_empty_text_raises_empty_body(self):
        """Test empty input fails with EmptyBodyError."""
        with pytest.raises(EmptyBodyError):
            parse("")

    def test_empty_body_is_parse_error(self):
        """Test EmptyBodyError is an EntryParseError."""
        assert issubclass(EmptyBodyError, EntryParseError)


class TestSplitLines:
    """Test newline splitting."""

    def test_final_newline_does_not_add_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_no_final_newline(self):
        assert split_lines("a\nb") == ["a", "b"]

    def test_form_feed_stays_in_line(self):
        assert split_lines("a\x0cb\n") == ["a\x0cb"]

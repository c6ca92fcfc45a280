"""Tests for text cleaning and status rendering."""
import pytest

from statusify.core.normalizer import clean_text, collapse_doubled, normalize, sanitize, truncate
from statusify.models.playback import PlaybackEvent, PlaybackState, Platform
from statusify.models.status import StatusKey

TEMPLATE = "${title} — ${artist}"


def playing(title, artist="Artist A", platform=None):
    return PlaybackEvent(title=title, artist=artist, state=PlaybackState.PLAYING, platform=platform)


class TestCleanText:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("  Song Title  •  1.2M views", "Song Title"),
            ("Echoes Echoes", "Echoes"),
            ("EchoesEchoes", "Echoes"),
            ("Song Song", "Song"),
            ("  Song \n\t  A  ", "Song A"),
            ("So\u200bng\ufeff A\u2060", "Song A"),
            ("Now playing: Windowlicker", "Windowlicker"),
            ("Current track:   Windowlicker", "Windowlicker"),
            ("Windowlicker - YouTube Music", "Windowlicker"),
            ("YouTube Music Windowlicker", "Windowlicker"),
            ("Aphex Twin By: someone else", "Aphex Twin"),
            ("Windowlicker on SoundCloud", "Windowlicker"),
            ("Live Set 345K views", "Live Set"),
        ],
    )
    def test_cleaning_rules(self, raw, expected):
        assert clean_text(raw, 100) == expected

    def test_empty_and_none(self):
        assert clean_text("", 100) == ""
        assert clean_text(None, 100) == ""
        assert clean_text("   \u200b ", 100) == ""

    def test_truncates_with_ellipsis(self):
        text = " ".join(f"word{i}" for i in range(30))
        result = clean_text(text, 100)
        assert result == text[:97] + "..."
        assert len(result) == 100

    def test_short_text_not_truncated(self):
        assert truncate("abc", 3) == "abc"


class TestCollapseDoubled:
    def test_too_short_is_kept(self):
        assert collapse_doubled("aa") == "aa"
        assert collapse_doubled("ab ab") == "ab ab"

    def test_different_halves_kept(self):
        assert collapse_doubled("Echoes Echo") == "Echoes Echo"


class TestSanitize:
    def test_keeps_decorations(self):
        # manual text is only whitespace-cleaned
        assert sanitize("  Lunch  •  back at 2 ", 100) == "Lunch • back at 2"

    def test_non_string(self):
        assert sanitize(None, 100) == ""


class TestNormalize:
    def test_renders_template(self):
        status = normalize(playing("Song A"), TEMPLATE, 100)
        assert status.display_text == "Song A — Artist A"
        assert status.key == StatusKey.for_text("Song A — Artist A")
        assert status.key.marker == "playing"

    def test_cleans_fields_before_rendering(self):
        status = normalize(playing("  Song Title  •  1.2M views", "Echoes Echoes"), TEMPLATE, 100)
        assert status.display_text == "Song Title — Echoes"

    def test_missing_artist_falls_back(self):
        status = normalize(playing("Song A", artist="  "), TEMPLATE, 100)
        assert status.display_text == "Song A — Unknown Artist"

    @pytest.mark.parametrize("state", [PlaybackState.PAUSED, PlaybackState.UNKNOWN])
    def test_not_playing_is_none(self, state):
        event = PlaybackEvent(title="Song A", artist="Artist A", state=state)
        assert normalize(event, TEMPLATE, 100) is None

    def test_empty_title_is_none(self):
        assert normalize(playing(" \u200b "), TEMPLATE, 100) is None

    def test_no_event_is_none(self):
        assert normalize(None, TEMPLATE, 100) is None

    def test_display_text_truncated(self):
        status = normalize(playing("The Longest Song Title Ever Written", "An Artist With A Long Name"), TEMPLATE, 40)
        assert len(status.display_text) == 40
        assert status.display_text.endswith("...")

    def test_text_change_changes_key(self):
        a = normalize(playing("Song A"), TEMPLATE, 100)
        b = normalize(playing("Song B"), TEMPLATE, 100)
        assert a.key != b.key
        assert a.key == normalize(playing("Song A"), TEMPLATE, 100).key

    def test_platform_passed_through(self):
        status = normalize(playing("Song A", platform=Platform.SPOTIFY), TEMPLATE, 100)
        assert status.platform is Platform.SPOTIFY

    def test_custom_template(self):
        status = normalize(playing("Song A"), "Listening to ${title} by ${artist}", 100)
        assert status.display_text == "Listening to Song A by Artist A"

    def test_blank_template_falls_back_to_title(self):
        status = normalize(playing("Song A"), "   ", 100)
        assert status.display_text == "Song A"

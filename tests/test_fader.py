"""
Tests for fading ANSI strings.

Run with: pytest tests/test_fader.py -v
"""

import re

import pytest

from tuifade.ansi import ColourMode, StyledSegment, parse_segments
from tuifade.colour import Colour, InterpolationCache, get_cache, interpolate
from tuifade.errors import CapabilityUnsupported, InvalidFormat
from tuifade.fader import fade, fade_ansi, fade_segment, fade_segments
from tuifade.terminal import TerminalProfile

TRUECOLOR_FG = re.compile(r"38;2;(\d+);(\d+);(\d+)")
TRUECOLOR_BG = re.compile(r"48;2;(\d+);(\d+);(\d+)")


def decoded(pattern, text):
    """Hex values of every truecolor code matching pattern in text."""
    return ["#{:02x}{:02x}{:02x}".format(*map(int, m)) for m in pattern.findall(text)]


class TestFadeSegment:
    """Tests for the per-segment colour rules."""

    def test_foreground_blends_against_terminal_background(self):
        segment = StyledSegment(text="x", fg=Colour.from_hex("#ff0000"))
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.fg.hex == "#800000"
        assert segment.bg is None

    def test_missing_foreground_gets_faded_terminal_foreground(self):
        segment = StyledSegment(text="x")
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.fg.hex == "#808080"
        assert segment.bg is None

    def test_foreground_blends_against_faded_background(self):
        """The foreground target is the segment's faded background, not the terminal's."""
        segment = StyledSegment(
            text="x",
            fg=Colour.from_hex("#ffffff"),
            bg=Colour.from_hex("#0000ff"),
        )
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.bg.hex == "#000080"
        assert segment.fg.hex == interpolate("#000080", "#ffffff", 0.5)
        assert segment.fg.hex == "#8080c0"

    def test_background_equal_to_terminal_left_untouched(self):
        original = Colour.from_hex("#000000")
        segment = StyledSegment(text="x", fg=Colour.from_hex("#ff0000"), bg=original)
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.bg is original
        assert segment.fg.hex == "#800000"

    def test_colour_mode_overridden(self):
        segment = StyledSegment(text="x", colour_mode=ColourMode.DEFAULT)
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.colour_mode == ColourMode.TRUECOLOR

    def test_text_and_offset_untouched(self):
        segment = StyledSegment(text="hello", offset=7, fg=Colour.from_hex("#00ff00"))
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.3)
        assert segment.text == "hello"
        assert segment.offset == 7

    def test_descriptor_views_stay_in_sync(self):
        segment = StyledSegment(text="x", fg=Colour.from_hex("#ff0000"))
        fade_segment(segment, "#000000", "#ffffff", ColourMode.TRUECOLOR, 0.5)
        assert segment.fg == Colour.from_hex(segment.fg.hex)

    def test_fade_segments_normalises_terminal_colours(self):
        segments = [StyledSegment(text="x", fg=Colour.from_hex("#ff0000"), bg=Colour.from_hex("#ffffff"))]
        fade_segments(segments, "#FFFFFF", "#000000", ColourMode.TRUECOLOR, 0.5)
        # Upper-case terminal background still matches the segment's
        assert segments[0].bg.hex == "#ffffff"
        assert segments[0].fg.hex == "#ff8080"


class TestFadeAnsi:
    """Tests for fade_ansi() with fixed terminal colours."""

    def test_basic_fade(self, term):
        result = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=0.5, **term)
        assert "Red text" in result
        assert decoded(TRUECOLOR_FG, result) == ["#800000"]
        # Segment had no background, so none is emitted
        assert decoded(TRUECOLOR_BG, result) == []
        assert result == "\x1b[38;2;128;0;0mRed text\x1b[0m"

    def test_no_fade(self, term):
        result = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=1.0, **term)
        assert decoded(TRUECOLOR_FG, result) == ["#ff0000"]

    def test_full_fade(self, term):
        result = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=0.0, **term)
        assert decoded(TRUECOLOR_FG, result) == ["#000000"]
        assert "Red text" in result

    def test_background_and_foreground(self, term):
        result = fade_ansi("\x1b[31;42mRed on green\x1b[0m", interpolation=0.5, **term)
        assert decoded(TRUECOLOR_BG, result) == ["#008000"]
        assert decoded(TRUECOLOR_FG, result) == [interpolate("#008000", "#ff0000", 0.5)]

    @pytest.mark.parametrize("content", [
        "\x1b[31;42mRed on green\x1b[0m",
        "\x1b[34;43mBlue on yellow\x1b[0m",
        "\x1b[35;46mMagenta on cyan\x1b[0m",
    ])
    def test_colour_combinations(self, term, content):
        result = fade_ansi(content, interpolation=0.5, **term)
        assert len(decoded(TRUECOLOR_BG, result)) == 1
        assert len(decoded(TRUECOLOR_FG, result)) == 1

    def test_multiple_segments_preserved(self, term):
        content = "\x1b[31mRed\x1b[32mGreen\x1b[33mYellow\x1b[0m"
        result = fade_ansi(content, interpolation=0.5, **term)
        faded = parse_segments(result)
        assert [s.text for s in faded] == ["Red", "Green", "Yellow"]
        assert decoded(TRUECOLOR_FG, result) == ["#800000", "#008000", "#808000"]

    def test_style_flags_preserved(self, term):
        result = fade_ansi("\x1b[1;4;31;44mBold red on blue\x1b[0m", interpolation=0.5, **term)
        assert result.startswith("\x1b[1;4;38;2;")
        segment = parse_segments(result)[0]
        assert segment.style.bold and segment.style.underline

    def test_plain_text_gains_faded_foreground(self, term):
        result = fade_ansi("Plain text", interpolation=0.5, **term)
        assert result == "\x1b[38;2;128;128;128mPlain text\x1b[0m"

    def test_empty_string(self, term):
        assert fade_ansi("", interpolation=0.5, **term) == ""

    def test_unicode(self, term):
        result = fade_ansi("\x1b[31mHello 世界 🌍\x1b[0m", interpolation=0.5, **term)
        assert "Hello 世界 🌍" in result

    def test_interpolation_clamped(self, term):
        low = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=-1.0, **term)
        high = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=2.0, **term)
        assert low == fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=0.0, **term)
        assert high == fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=1.0, **term)

    def test_eight_bit_mode(self, term):
        term["colour_mode"] = ColourMode.EIGHT_BIT
        result = fade_ansi("\x1b[31mRed\x1b[0m", interpolation=1.0, **term)
        assert result == "\x1b[38;5;196mRed\x1b[0m"

    def test_mode_follows_each_call(self, term):
        """Earlier renders in another mode do not leak into later output."""
        for content in ("\x1b[31mRed\x1b[0m", "\x1b[1;31mRed\x1b[0m"):
            term["colour_mode"] = ColourMode.TRUECOLOR
            truecolor = fade_ansi(content, interpolation=1.0, **term)
            term["colour_mode"] = ColourMode.EIGHT_BIT
            eight_bit = fade_ansi(content, interpolation=1.0, **term)
            term["colour_mode"] = ColourMode.DEFAULT
            standard = fade_ansi(content, interpolation=1.0, **term)
            term["colour_mode"] = ColourMode.TRUECOLOR
            again = fade_ansi(content, interpolation=1.0, **term)

            assert "38;2;255;0;0m" in truecolor
            assert "38;5;196m" in eight_bit
            assert re.fullmatch(r"\x1b\[(1;)?(3[0-7]|9[0-7])mRed\x1b\[0m", standard)
            assert again == truecolor

    def test_control_characters_preserved(self, term):
        content = "\x1b[31mA\x08_B\x07C\x0cD\x0bE\tF\x1b[0m"
        result = fade_ansi(content, interpolation=0.5, **term)
        assert re.sub(r"\x1b\[[0-9;]*m", "", result) == "A\x08_B\x07C\x0cD\x0bE\tF"
        assert set(decoded(TRUECOLOR_FG, result)) == {"#800000"}

    def test_overstrike_output_preserved(self, term):
        """Backspace overstrike, as in piped man pages."""
        result = fade_ansi("N\x08NA\x08AM\x08ME\x08E", interpolation=0.5, **term)
        assert re.sub(r"\x1b\[[0-9;]*m", "", result) == "N\x08NA\x08AM\x08ME\x08E"

    def test_hyperlink_output_is_deterministic(self, term):
        content = "\x1b]8;;http://a\x1b\\L\x1b]8;;\x1b\\"
        first = fade_ansi(content, interpolation=0.5, **term)
        second = fade_ansi(content, interpolation=0.5, **term)
        assert first == second
        assert first == "\x1b]8;;http://a\x1b\\\x1b[38;2;128;128;128mL\x1b[0m\x1b]8;;\x1b\\"

    def test_bel_terminated_hyperlink(self, term):
        content = "\x1b]8;;http://a\x07L\x1b]8;;\x07"
        result = fade_ansi(content, interpolation=0.5, **term)
        assert result == "\x1b]8;;http://a\x1b\\\x1b[38;2;128;128;128mL\x1b[0m\x1b]8;;\x1b\\"

    def test_fading_twice(self, term):
        once = fade_ansi("\x1b[31mRed text\x1b[0m", interpolation=0.5, **term)
        twice = fade_ansi(once, interpolation=0.5, **term)
        assert decoded(TRUECOLOR_FG, twice) == ["#400000"]

    def test_invalid_terminal_colour_raises(self, term):
        term["term_bg"] = "black"
        with pytest.raises(InvalidFormat):
            fade_ansi("\x1b[31mRed\x1b[0m", interpolation=0.5, **term)

    def test_invalid_colour_from_interpolator_aborts(self, term):
        """An error in any segment aborts the whole fade."""
        calls = []

        def broken(bg, fg, factor):
            calls.append(fg)
            if len(calls) == 2:
                raise InvalidFormat("#zzzzzz")
            return Colour.from_hex(fg)

        with pytest.raises(InvalidFormat):
            fade_ansi("\x1b[31mRed\x1b[32mGreen\x1b[0m", interpolation=0.5, interpolator=broken, **term)

    def test_custom_interpolator_used(self, term):
        cache = InterpolationCache()
        content = "\x1b[31mRed\x1b[0m \x1b[31mRed\x1b[0m"
        fade_ansi(content, interpolation=0.5, interpolator=cache, **term)
        assert cache.misses == 2  # red foreground, default foreground for the space
        assert cache.hits == 1

    @pytest.mark.stress
    def test_long_input(self, term):
        content = "".join(f"\x1b[{31 + i % 6}mtext{i} " for i in range(3000)) + "\x1b[0m"
        result = fade_ansi(content, interpolation=0.5, **term)
        assert len(parse_segments(result)) == 3000


class TestFade:
    """Tests for the top-level fade()."""

    def test_uses_profile_colours(self, truecolor_profile):
        result = fade("\x1b[31mRed text\x1b[0m", 0.5, profile=truecolor_profile)
        assert result == "\x1b[38;2;128;0;0mRed text\x1b[0m"

    def test_light_terminal(self):
        profile = TerminalProfile(colour_system="truecolor", background="#ffffff", foreground="#000000")
        result = fade("plain", 0.5, profile=profile)
        assert decoded(TRUECOLOR_FG, result) == ["#808080"]

    @pytest.mark.parametrize("colour_system", ["256", "standard", "windows", None])
    def test_non_truecolor_terminal_returns_original(self, colour_system):
        profile = TerminalProfile(colour_system=colour_system)
        content = "\x1b[31mRed text\x1b[0m"
        with pytest.raises(CapabilityUnsupported) as exc:
            fade(content, 0.5, profile=profile)
        assert exc.value.content == content
        assert exc.value.colour_system == colour_system

    def test_global_cache_populated(self, truecolor_profile):
        fade("\x1b[31mRed\x1b[0m", 0.5, profile=truecolor_profile)
        assert len(get_cache()) == 1

    def test_explicit_cache(self, truecolor_profile):
        cache = InterpolationCache()
        fade("\x1b[31mRed\x1b[0m", 0.5, profile=truecolor_profile, cache=cache)
        fade("\x1b[31mRed\x1b[0m", 0.5, profile=truecolor_profile, cache=cache)
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(get_cache()) == 0

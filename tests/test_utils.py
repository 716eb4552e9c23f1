"""Tests for naming helpers."""

import pytest

from bringtolife.utils import name_from_prompt, to_file_slug


class TestNameFromPrompt:
    @pytest.mark.parametrize(
        "prompt,expected",
        [
            ("a chess clock", "a chess clock"),
            ("a chess clock with two timers", "a chess clock with..."),
            ("  spaced   out   words  ", "spaced out words"),
            ("supercalifragilisticexpialidocious soundboard", "supercalifragilisticexpiali..."),
        ],
    )
    def test_names(self, prompt, expected):
        assert name_from_prompt(prompt) == expected

    def test_never_longer_than_limit(self):
        assert len(name_from_prompt("x" * 80)) == 30


class TestToFileSlug:
    def test_slug(self):
        assert to_file_slug("Chess Clock!") == "chess_clock_"

    def test_non_ascii_replaced(self):
        assert to_file_slug("مشروع جديد") == "__________"

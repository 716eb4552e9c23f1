"""Tests for prompt composition."""

import pytest

from bringtolife.services.prompt import (
    DEMO_REQUEST,
    FILE_ANALYSIS_DIRECTIVE,
    USER_REQUEST_LABEL,
    compose_prompt,
)


class TestComposePrompt:
    def test_file_with_text_keeps_directive_and_labeled_request(self):
        prompt = compose_prompt("find hidden wifi", has_file=True, locale="en")

        assert prompt.startswith(FILE_ANALYSIS_DIRECTIVE)
        assert f"{USER_REQUEST_LABEL} find hidden wifi\n" in prompt

    def test_user_request_follows_directive(self):
        prompt = compose_prompt("find hidden wifi", has_file=True, locale="en")

        assert prompt.index(FILE_ANALYSIS_DIRECTIVE) < prompt.index(USER_REQUEST_LABEL)

    def test_file_only_uses_directive(self):
        prompt = compose_prompt("", has_file=True, locale="en")

        assert FILE_ANALYSIS_DIRECTIVE in prompt
        assert USER_REQUEST_LABEL not in prompt
        assert DEMO_REQUEST not in prompt

    def test_nothing_given_uses_demo_request(self):
        prompt = compose_prompt("", has_file=False, locale="en")

        assert prompt.startswith(DEMO_REQUEST)
        assert USER_REQUEST_LABEL not in prompt

    def test_whitespace_text_counts_as_empty(self):
        prompt = compose_prompt("   \n ", has_file=False, locale="en")

        assert prompt.startswith(DEMO_REQUEST)

    def test_text_only_sends_request_once(self):
        prompt = compose_prompt("a chess clock", has_file=False, locale="en")

        assert prompt.startswith(f"{USER_REQUEST_LABEL} a chess clock")
        assert prompt.count("a chess clock") == 1
        assert FILE_ANALYSIS_DIRECTIVE not in prompt
        assert DEMO_REQUEST not in prompt

    @pytest.mark.parametrize(
        "locale,label",
        [("en", "English (LTR)"), ("ar", "Arabic (RTL)")],
    )
    def test_locale_clause_always_last(self, locale, label):
        prompt = compose_prompt("a chess clock", has_file=False, locale=locale)

        last_section = prompt.split("\n\n")[-1]
        assert last_section.startswith("CONTEXT:")
        assert label in last_section

    def test_unknown_locale_rejected(self):
        with pytest.raises(ValueError):
            compose_prompt("x", has_file=False, locale="fr")

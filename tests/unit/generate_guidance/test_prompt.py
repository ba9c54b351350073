"""Tests for generate_guidance.prompt module."""

from generate_guidance.instructions import GUIDANCE_INSTRUCTIONS
from generate_guidance.models import GuidanceRequest
from generate_guidance.prompt import MILESTONE_CONTEXT_CHARS, build_prompt, format_age


class TestFormatAge:
    def test_months(self) -> None:
        assert format_age(14) == "14 months"

    def test_whole_years(self) -> None:
        assert format_age(36) == "3 years (36 months)"

    def test_missing(self) -> None:
        assert format_age(None) == "not provided"
        assert format_age(-1) == "not provided"


class TestBuildPrompt:
    def test_deterministic(self) -> None:
        request = GuidanceRequest(mode="ask", text="Is babbling normal?", child_age_months=9)
        assert build_prompt(request) == build_prompt(GuidanceRequest(mode="ask", text="Is babbling normal?", child_age_months=9))

    def test_contains_instructions_and_context(self) -> None:
        request = GuidanceRequest(
            mode="checkin",
            text="Slept   well, ate less.",
            milestone_context="Walks with support",
            parent_context="First-time parent",
            conversation_context="Asked about sleep yesterday",
            child_age_months=12,
            focus_domain="motor",
        )

        prompt = build_prompt(request)

        assert prompt.startswith(GUIDANCE_INSTRUCTIONS)
        assert "Mode: checkin" in prompt
        assert "Child age: 12 months" in prompt
        assert "Focus domain: motor" in prompt
        assert "Milestone context: Walks with support" in prompt
        assert "Parent context: First-time parent" in prompt
        assert "Recent conversation: Asked about sleep yesterday" in prompt
        assert prompt.endswith("Parent daily check-in summary: Slept well, ate less.")

    def test_missing_context_marked(self) -> None:
        prompt = build_prompt(GuidanceRequest(mode="ask", text="Question?"))
        assert "Milestone context: none provided" in prompt
        assert prompt.endswith("Parent question: Question?")

    def test_long_context_truncated(self) -> None:
        request = GuidanceRequest(mode="ask", text="Q?", milestone_context="word " * 1000)
        line = next(l for l in build_prompt(request).splitlines() if l.startswith("Milestone context: "))
        assert len(line) <= len("Milestone context: ") + MILESTONE_CONTEXT_CHARS

    def test_instructions_require_json_keys(self) -> None:
        for key in ("whatIsHappeningDevelopmentally", "whenToSeekClinicalScreening", "citations", "uncertainty"):
            assert key in GUIDANCE_INSTRUCTIONS

"""Tests for the professional text formatter."""

import pytest

from devlog.core.formatter import (
    ProfessionalFormatter,
    format_professional_notes,
    generate_professional_summary,
    suggest_tags,
    to_professional_header,
    to_professional_text,
)
from devlog.core.types import LogEntry


class TestProfessionalText:
    """Tests for to_professional_text."""

    def test_replaces_whole_words(self):
        """Terms are replaced on word boundaries, case-insensitively."""
        assert to_professional_text("fixed the login") == "Resolved the login"
        assert to_professional_text("We Fixed it") == "We resolved it"

    def test_does_not_replace_inside_words(self):
        """Terms do not match inside longer words."""
        assert to_professional_text("prefixed values") == "Prefixed values"

    def test_replaces_phrases(self):
        """Phrases are replaced wherever they occur."""
        assert to_professional_text("set up the runner") == "Configured the runner"

    def test_capitalizes_sentences(self):
        """First character and sentence starts are upper-cased."""
        assert to_professional_text("done. next step") == "Done. Next step"

    def test_rules_apply_once_in_table_order(self):
        """Each rule runs once, in order, with no fixed-point iteration."""
        formatter = ProfessionalFormatter(
            terms={"b": "c", "a": "b"}, phrases={}, headers={}
        )

        assert formatter.to_professional_text("a") == "B"
        assert formatter.to_professional_text("b") == "C"

    def test_empty_text(self):
        """Empty input is returned unchanged."""
        assert to_professional_text("") == ""


class TestProfessionalHeader:
    """Tests for to_professional_header."""

    def test_exact_table_match(self):
        """Known headers map to their canonical form."""
        assert to_professional_header("bug fix") == "Issue Resolution"
        assert to_professional_header("Bug Fix") == "Issue Resolution"

    def test_title_cases_unknown_header(self):
        """Unknown headers are title-cased word by word."""
        assert to_professional_header("fix login") == "Fix Login"

    def test_transforms_then_title_cases(self):
        """Vocabulary substitution happens before title-casing."""
        assert to_professional_header("fixed LOGIN flow") == "Resolved Login Flow"

    def test_custom_headers(self):
        """Header tables are bound at construction."""
        formatter = ProfessionalFormatter(headers={"ops": "Operations"})

        assert formatter.to_professional_header("OPS") == "Operations"
        assert formatter.to_professional_header("bug fix") == "Bug Fix"


class TestProfessionalNotes:
    """Tests for format_professional_notes."""

    def test_bullets_and_periods(self):
        """Each non-empty line becomes a capitalised bullet with a period."""
        notes = "fixed the bug\n\n  - added tests  \nreleased."

        assert format_professional_notes(notes) == (
            "- Resolved the bug.\n- Integrated tests.\n- Released."
        )

    def test_empty_notes(self):
        """Empty notes are returned unchanged."""
        assert format_professional_notes("") == ""


class TestProfessionalSummary:
    """Tests for generate_professional_summary."""

    def test_empty_entries(self):
        """No entries produce the fixed placeholder."""
        assert generate_professional_summary([]) == (
            "No activities recorded for this period."
        )

    def test_counts_tasks_per_header(self):
        """Tasks are counted per header across entries."""
        entries = [
            LogEntry("2024-06-01", "Bug Fixes", ("- One.", "- Two.")),
            LogEntry("2024-06-02", "Testing", ("- Three.",)),
            LogEntry("2024-06-02", "Bug Fixes", ("- Four.",)),
        ]

        summary = generate_professional_summary(entries)

        assert summary.startswith(
            "During this period, 4 development tasks were completed "
            "across 2 main areas"
        )
        assert "**Bug Fixes**: 3 tasks completed" in summary
        assert "**Testing**: 1 tasks completed" in summary


class TestSuggestTags:
    """Tests for suggest_tags."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Fix the login error", ["bug"]),
            ("Implement new export", ["feature"]),
            ("Update README", ["docs"]),
            ("nothing relevant here", []),
        ],
    )
    def test_keyword_rules(self, text, expected):
        """Tags are suggested from keyword rules in rule order."""
        assert suggest_tags(text) == expected

    def test_custom_rules(self):
        """Rules can be supplied by the caller."""
        assert suggest_tags("deploy to prod", {"ops": ["deploy"]}) == ["ops"]

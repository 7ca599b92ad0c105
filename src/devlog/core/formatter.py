"""Professional text formatter for client-ready output.

Converts casual wording to formal wording with dictionary substitution. The
transform is purely lexical: each table is applied once, in order, with no
attempt to reach a fixed point.
"""

import re
from collections.abc import Iterable, Mapping, Sequence

from devlog.core.config import AUTO_TAG_RULES
from devlog.core.types import LogEntry
from devlog.core.vocabulary import (
    PROFESSIONAL_HEADERS,
    PROFESSIONAL_PHRASES,
    PROFESSIONAL_TERMS,
)

_FIRST_CHAR = re.compile(r"^(.)")
_SENTENCE_START = re.compile(r"\. (.)")
_WORD = re.compile(r"\w+")

BULLET = "- "


class ProfessionalFormatter:
    """Applies the casual-to-formal lookup tables bound at construction."""

    def __init__(
        self,
        terms: Mapping[str, str] = PROFESSIONAL_TERMS,
        phrases: Mapping[str, str] = PROFESSIONAL_PHRASES,
        headers: Mapping[str, str] = PROFESSIONAL_HEADERS,
    ):
        """
        Initialize the formatter.

        Args:
            terms: Single-word replacements, matched on word boundaries
            phrases: Phrase replacements, matched anywhere in the text
            headers: Exact lowercase header -> canonical header
        """
        self.headers = dict(headers)
        self._term_rules = [
            (re.compile(rf"\b{re.escape(casual)}\b", re.IGNORECASE), formal)
            for casual, formal in terms.items()
        ]
        self._phrase_rules = [
            (re.compile(re.escape(casual), re.IGNORECASE), formal)
            for casual, formal in phrases.items()
        ]

    def to_professional_text(self, text: str) -> str:
        """Convert casual text to professional wording."""
        if not text:
            return text

        professional = text
        for pattern, formal in self._term_rules:
            professional = pattern.sub(formal, professional)
        for pattern, formal in self._phrase_rules:
            professional = pattern.sub(formal, professional)

        professional = _FIRST_CHAR.sub(lambda m: m.group(1).upper(), professional)
        professional = _SENTENCE_START.sub(
            lambda m: ". " + m.group(1).upper(), professional
        )
        return professional

    def to_professional_header(self, header: str) -> str:
        """Convert a casual header to a canonical, title-cased header."""
        if not header:
            return header

        canonical = self.headers.get(header.lower().strip())
        if canonical:
            return canonical

        professional = self.to_professional_text(header)
        return _WORD.sub(
            lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), professional
        )

    def format_professional_notes(self, notes: str) -> str:
        """Format free text into professional bullet lines, one per input line."""
        if not notes:
            return notes

        formatted_lines = []
        for raw_line in notes.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            if not line.startswith(BULLET):
                line = BULLET + line

            content = line[len(BULLET) :].strip()
            professional = self.to_professional_text(content)
            capitalized = professional[:1].upper() + professional[1:]
            if not capitalized.endswith("."):
                capitalized += "."
            formatted_lines.append(BULLET + capitalized)

        return "\n".join(formatted_lines)


def _count_tasks(entry: LogEntry) -> int:
    return sum(1 for note in entry.notes if note.strip().startswith(BULLET))


def generate_professional_summary(entries: Sequence[LogEntry]) -> str:
    """Summarize entries as task counts per header."""
    if not entries:
        return "No activities recorded for this period."

    categories = list(dict.fromkeys(entry.header for entry in entries))
    total_tasks = sum(_count_tasks(entry) for entry in entries)

    summary = (
        f"During this period, {total_tasks} development tasks were completed "
        f"across {len(categories)} main areas:\n\n"
    )
    for category in categories:
        task_count = sum(
            _count_tasks(entry) for entry in entries if entry.header == category
        )
        summary += f"**{category}**: {task_count} tasks completed\n"

    summary += "\nAll deliverables have been tested and are ready for client review."
    return summary


def suggest_tags(
    text: str, rules: Mapping[str, Iterable[str]] = AUTO_TAG_RULES
) -> list[str]:
    """Suggest tags whose keywords occur in the text."""
    lowered = text.lower()
    return [
        tag
        for tag, keywords in rules.items()
        if any(keyword in lowered for keyword in keywords)
    ]


_default_formatter = ProfessionalFormatter()


def to_professional_text(text: str) -> str:
    return _default_formatter.to_professional_text(text)


def to_professional_header(header: str) -> str:
    return _default_formatter.to_professional_header(header)


def format_professional_notes(notes: str) -> str:
    return _default_formatter.format_professional_notes(notes)

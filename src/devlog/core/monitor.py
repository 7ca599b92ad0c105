"""In-memory development monitor.

Watches conversation turns between a developer and an assistant, classifies
them by keyword, and turns completed tasks into professional log summaries.
Nothing is persisted; the owner of a DevelopmentMonitor decides its lifetime.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from devlog.core.formatter import ProfessionalFormatter

logger = logging.getLogger(__name__)

ACTIVITY_PATTERNS = {
    "featureImplementation": re.compile(
        r"implement|add|create|build|develop|integrate", re.IGNORECASE
    ),
    "bugFix": re.compile(r"fix|resolve|debug|patch|correct|repair", re.IGNORECASE),
    "refactoring": re.compile(
        r"refactor|restructure|optimize|improve|enhance", re.IGNORECASE
    ),
    "testing": re.compile(r"test|validate|verify|check|spec", re.IGNORECASE),
    "documentation": re.compile(
        r"document|comment|readme|guide|doc", re.IGNORECASE
    ),
    "configuration": re.compile(
        r"config|setup|install|deploy|environment", re.IGNORECASE
    ),
}

TECHNICAL_TERMS = {
    "api": "API integration",
    "database": "database operations",
    "frontend": "user interface",
    "backend": "server-side logic",
    "auth": "authentication system",
    "ui": "user interface",
    "ux": "user experience",
    "responsive": "responsive design",
    "mobile": "mobile compatibility",
    "security": "security implementation",
    "performance": "performance optimization",
    "validation": "data validation",
    "error handling": "error management",
    "middleware": "middleware layer",
    "routing": "application routing",
}

TECH_PATTERNS = {
    "javascript": re.compile(r"\.js|javascript|node\.js|npm", re.IGNORECASE),
    "typescript": re.compile(r"\.ts|typescript", re.IGNORECASE),
    "react": re.compile(r"react|jsx|component", re.IGNORECASE),
    "python": re.compile(r"\.py|python|django|flask", re.IGNORECASE),
    "database": re.compile(r"sql|database|mysql|postgresql|mongodb", re.IGNORECASE),
    "api": re.compile(r"api|endpoint|rest|graphql", re.IGNORECASE),
    "css": re.compile(r"\.css|styling|styles", re.IGNORECASE),
    "html": re.compile(r"\.html|markup", re.IGNORECASE),
}

DEVELOPMENT_KEYWORDS = [
    "implement", "create", "build", "develop", "add", "fix", "debug",
    "refactor", "optimize", "test", "validate", "deploy", "configure",
    "integrate", "api", "database", "frontend", "backend", "component",
    "function", "class", "method", "variable", "endpoint", "route",
    "authentication", "authorization", "validation", "error", "bug",
    "feature", "enhancement", "improvement", "security", "performance",
]  # fmt: skip

COMPLETION_INDICATORS = [
    "completed", "finished", "done", "implemented", "created", "built",
    "fixed", "resolved", "deployed", "integrated", "added", "updated",
]  # fmt: skip

AI_SUCCESS_INDICATORS = ["successfully", "completed", "implemented", "created"]

ACTION_PAST_TENSE = {
    "implement": "Implemented",
    "create": "Created",
    "build": "Built",
    "develop": "Developed",
    "add": "Added",
    "fix": "Fixed",
    "debug": "Debugged",
    "refactor": "Refactored",
    "optimize": "Optimized",
    "test": "Tested",
    "validate": "Validated",
    "deploy": "Deployed",
    "configure": "Configured",
    "integrate": "Integrated",
    "update": "Updated",
    "enhance": "Enhanced",
    "improve": "Improved",
}

DECISION_KEYWORDS = [
    "choose", "decided", "selected", "approach", "strategy",
    "architecture", "design", "pattern", "solution",
]  # fmt: skip

REASONING_KEYWORDS = ["because", "since", "due to", "as", "for"]

IMPACT = {
    "featureImplementation": "high",
    "bugFix": "medium",
    "refactoring": "medium",
    "testing": "low",
    "documentation": "low",
    "configuration": "medium",
}

TASK_CONVERSIONS = {
    "implemented": "Implemented",
    "created": "Developed",
    "built": "Constructed",
    "added": "Integrated",
    "fixed": "Resolved",
    "debugged": "Diagnosed and corrected",
    "refactored": "Restructured and optimized",
    "optimized": "Enhanced performance of",
    "tested": "Validated functionality of",
    "deployed": "Successfully deployed",
    "configured": "Configured and established",
    "integrated": "Successfully integrated",
    "updated": "Updated and enhanced",
    "enhanced": "Improved and enhanced",
    "improved": "Optimized and refined",
}

CATEGORY_PRIORITY = {
    "featureImplementation": 5,
    "bugFix": 4,
    "refactoring": 3,
    "testing": 2,
    "documentation": 1,
    "configuration": 2,
}

LOG_CATEGORIES = {
    "featureImplementation": "Feature Implementation",
    "bugFix": "Bug Fixes",
    "refactoring": "Refactoring",
    "testing": "Testing",
    "documentation": "Documentation",
    "configuration": "DevOps",
}

CATEGORY_TAGS = {
    "featureImplementation": ["features", "implementation"],
    "bugFix": ["bug-fixes", "debugging"],
    "refactoring": ["refactoring", "optimization"],
    "testing": ["testing", "validation"],
    "documentation": ["documentation"],
    "configuration": ["configuration", "setup"],
}

CATEGORY_DISPLAY_NAMES = {
    "featureImplementation": "Feature Implementation",
    "bugFix": "Bug Resolution",
    "refactoring": "Code Optimization",
    "testing": "Quality Assurance",
    "documentation": "Documentation",
    "configuration": "System Configuration",
}

_SECRETS = re.compile(r"password|token|key|secret", re.IGNORECASE)
_URLS = re.compile(r"https?://[^\s]+")
_IPS = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")


@dataclass
class ConversationRecord:
    timestamp: datetime
    user_prompt: str
    intent: str
    category: str
    technical_context: list[str]
    code_changes: dict[str, Any] | None = None


@dataclass
class TaskCompletion:
    timestamp: datetime
    task: str
    category: str
    technical_details: list[str]
    impact: str


@dataclass
class TechnicalDecision:
    timestamp: datetime
    decision: str | None
    reasoning: str | None
    context: list[str]


@dataclass
class SessionData:
    """Everything observed since monitoring started."""

    start_time: datetime | None = None
    activities: list[ConversationRecord] = field(default_factory=list)
    task_completions: list[TaskCompletion] = field(default_factory=list)
    technical_decisions: list[TechnicalDecision] = field(default_factory=list)
    last_log_time: datetime | None = None


@dataclass
class WorkSummary:
    """A log-ready summary of recently completed tasks."""

    header: str
    notes: str
    category: str
    tags: list[str]
    completions_processed: int
    session_duration: int


def _unique(items: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(items))


class DevelopmentMonitor:
    """Tracks development activity for one server or CLI session."""

    def __init__(
        self,
        formatter: ProfessionalFormatter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the monitor (inactive until start() is called).

        Args:
            formatter: Formatter for summary headers
            clock: Source of the current time
        """
        self.formatter = formatter or ProfessionalFormatter()
        self.clock = clock
        self.is_active = False
        self.session = SessionData()

    # --- Lifecycle ---

    def start(self) -> dict[str, Any]:
        """Start monitoring with a fresh session."""
        if self.is_active:
            return {"status": "already_active", "message": "Monitoring already active"}

        self.is_active = True
        self.session = SessionData(start_time=self.clock())
        logger.info("Started development monitoring")
        return {
            "status": "started",
            "start_time": self.session.start_time,
            "message": "Monitoring active - tracking development activities",
        }

    def stop(self) -> dict[str, Any]:
        """Stop monitoring; session data is kept."""
        if not self.is_active:
            return {"status": "not_active", "message": "Monitoring not active"}

        session_summary = {
            "duration": self.get_session_duration(),
            "total_activities": len(self.session.activities),
            "task_completions": len(self.session.task_completions),
            "technical_decisions": len(self.session.technical_decisions),
        }
        self.is_active = False
        logger.info("Stopped development monitoring")
        return {
            "status": "stopped",
            "session_summary": session_summary,
            "message": "Monitoring stopped - session data preserved",
        }

    # --- Conversation analysis ---

    def analyze_conversation(
        self,
        user_prompt: str,
        ai_response: str | None = None,
        code_changes: Sequence[str] | None = None,
    ) -> dict[str, Any] | None:
        """
        Record a conversation turn if it looks like development work.

        Returns:
            The analysis, or None while monitoring is inactive
        """
        if not self.is_active:
            return None

        timestamp = self.clock()
        analysis = self.extract_development_intent(
            user_prompt, ai_response, code_changes
        )
        if not analysis["is_relevant"]:
            return analysis

        self.session.activities.append(
            ConversationRecord(
                timestamp=timestamp,
                user_prompt=self.sanitize_prompt(user_prompt),
                intent=analysis["intent"],
                category=analysis["category"],
                technical_context=analysis["technical_context"],
                code_changes=(
                    self.analyze_code_changes(code_changes) if code_changes else None
                ),
            )
        )

        if analysis["is_task_completion"]:
            self.session.task_completions.append(
                TaskCompletion(
                    timestamp=timestamp,
                    task=analysis["task_description"],
                    category=analysis["category"],
                    technical_details=analysis["technical_context"],
                    impact=analysis["impact"],
                )
            )

        if analysis["technical_decision"]:
            self.session.technical_decisions.append(
                TechnicalDecision(
                    timestamp=timestamp,
                    decision=analysis["technical_decision"],
                    reasoning=analysis["reasoning"],
                    context=analysis["technical_context"],
                )
            )
        return analysis

    def extract_development_intent(
        self,
        user_prompt: str,
        ai_response: str | None = None,
        code_changes: Sequence[str] | None = None,
    ) -> dict[str, Any]:
        prompt = user_prompt.lower()
        if not self.is_development_activity(prompt):
            return {"is_relevant": False}

        category = self.categorize_activity(prompt)
        technical_context = self.extract_technical_context(prompt, ai_response)
        is_completion = self.is_task_completion(prompt, ai_response, code_changes)
        decision, reasoning = self.extract_technical_decision(prompt, ai_response)

        return {
            "is_relevant": True,
            "intent": prompt,
            "category": category,
            "technical_context": technical_context,
            "is_task_completion": is_completion,
            "task_description": (
                self.generate_task_description(prompt, technical_context)
                if is_completion
                else None
            ),
            "technical_decision": decision,
            "reasoning": reasoning,
            "impact": IMPACT.get(category, "low"),
        }

    def is_development_activity(self, prompt: str) -> bool:
        return any(keyword in prompt for keyword in DEVELOPMENT_KEYWORDS)

    def categorize_activity(self, prompt: str) -> str:
        for category, pattern in ACTIVITY_PATTERNS.items():
            if pattern.search(prompt):
                return category
        return "general"

    def extract_technical_context(
        self, prompt: str, ai_response: str | None = None
    ) -> list[str]:
        context = [
            description
            for term, description in TECHNICAL_TERMS.items()
            if term in prompt
        ]
        for tech, pattern in TECH_PATTERNS.items():
            if pattern.search(prompt) or (ai_response and pattern.search(ai_response)):
                context.append(tech)
        return context

    def is_task_completion(
        self,
        prompt: str,
        ai_response: str | None = None,
        code_changes: Sequence[str] | None = None,
    ) -> bool:
        if any(indicator in prompt for indicator in COMPLETION_INDICATORS):
            return True
        ai_success = bool(ai_response) and any(
            indicator in ai_response for indicator in AI_SUCCESS_INDICATORS
        )
        return bool(code_changes) and ai_success

    def generate_task_description(
        self, prompt: str, technical_context: Sequence[str]
    ) -> str:
        description = self.extract_main_action(prompt)
        if technical_context:
            description += f" involving {', '.join(technical_context)}"
        return description

    def extract_main_action(self, prompt: str) -> str:
        for action, past_tense in ACTION_PAST_TENSE.items():
            if action in prompt:
                return past_tense
        return "Completed"

    def extract_technical_decision(
        self, prompt: str, ai_response: str | None = None
    ) -> tuple[str | None, str | None]:
        has_decision = any(
            keyword in prompt or (ai_response and keyword in ai_response)
            for keyword in DECISION_KEYWORDS
        )
        if not has_decision:
            return None, None

        text = f"{prompt} {ai_response or ''}"
        decision = next(
            (
                sentence.strip()
                for sentence in text.split(".")
                if "decide" in sentence or "choose" in sentence or "use" in sentence
            ),
            None,
        )
        reasoning = None
        for keyword in REASONING_KEYWORDS:
            index = text.find(keyword)
            if index != -1:
                reasoning = text[index:].split(".")[0].strip()
                break
        return decision, reasoning

    def analyze_code_changes(self, code_changes: Sequence[str]) -> dict[str, Any]:
        change_types = []
        for change in code_changes:
            if "function" in change or "class" in change:
                change_types.append("implementation")
            if "test" in change or "spec" in change:
                change_types.append("testing")
            if "//" in change or "/**" in change:
                change_types.append("documentation")

        total_lines = sum(len(change.split("\n")) for change in code_changes)
        if total_lines > 100:
            complexity = "high"
        elif total_lines > 50:
            complexity = "medium"
        else:
            complexity = "low"

        return {
            "files_modified": len(code_changes),
            "change_types": _unique(change_types),
            "complexity": complexity,
        }

    def sanitize_prompt(self, prompt: str) -> str:
        """Redact secrets, URLs and IP addresses."""
        prompt = _SECRETS.sub("[REDACTED]", prompt)
        prompt = _URLS.sub("[URL]", prompt)
        return _IPS.sub("[IP]", prompt)

    # --- Summaries ---

    def generate_work_summary(
        self, custom_header: str | None = None
    ) -> WorkSummary | None:
        """
        Summarize tasks completed since the last summary.

        Returns:
            WorkSummary, or None when nothing new was completed
        """
        if not self.is_active and not self.session.task_completions:
            return None

        now = self.clock()
        cutoff = self.session.last_log_time or self.session.start_time
        recent = [
            completion
            for completion in self.session.task_completions
            if cutoff is None or completion.timestamp > cutoff
        ]
        if not recent:
            return None

        summary = self._create_work_summary(recent, custom_header, now)
        self.session.last_log_time = now
        return summary

    def _create_work_summary(
        self,
        completions: Sequence[TaskCompletion],
        custom_header: str | None,
        now: datetime,
    ) -> WorkSummary:
        header = custom_header or f"Development Progress - {now.date().isoformat()}"
        grouped = self._group_by_category(completions)

        notes = "".join(
            f"- {self.convert_to_professional_language(c.task)}.\n"
            for items in grouped.values()
            for c in items
        )
        return WorkSummary(
            header=self.formatter.to_professional_header(header),
            notes=notes
            or "- Continued development work and made progress on current tasks.\n",
            category=self._infer_primary_category(grouped),
            tags=self._generate_tags(grouped),
            completions_processed=len(completions),
            session_duration=self.get_session_duration(),
        )

    def generate_daily_summary(self) -> str | None:
        """Summarize every task completed this session, or None if none."""
        if not self.session.task_completions:
            return None

        grouped = self._group_by_category(self.session.task_completions)
        total = sum(len(items) for items in grouped.values())

        summary = (
            f"Successfully completed {total} development tasks "
            f"across {len(grouped)} main areas:\n\n"
        )
        for category, completions in grouped.items():
            name = CATEGORY_DISPLAY_NAMES.get(category, category)
            summary += f"**{name}**: {len(completions)} tasks completed\n"
            for completion in completions:
                task = self.convert_to_professional_language(completion.task)
                summary += f"- {task}\n"
            summary += "\n"

        summary += "All deliverables have been tested and are ready for client review."
        return summary

    def convert_to_professional_language(self, task: str) -> str:
        professional = task
        for casual, formal in TASK_CONVERSIONS.items():
            professional = re.sub(casual, formal, professional, flags=re.IGNORECASE)
        return professional

    def _group_by_category(
        self, completions: Sequence[TaskCompletion]
    ) -> dict[str, list[TaskCompletion]]:
        grouped: dict[str, list[TaskCompletion]] = {}
        for completion in completions:
            grouped.setdefault(completion.category, []).append(completion)
        return grouped

    def _infer_primary_category(self, grouped: dict[str, Any]) -> str:
        if not grouped:
            return "Feature Implementation"
        primary = None
        for category in grouped:
            if primary is None or CATEGORY_PRIORITY.get(
                category, 0
            ) > CATEGORY_PRIORITY.get(primary, 0):
                primary = category
        return LOG_CATEGORIES.get(primary, "Feature Implementation")

    def _generate_tags(self, grouped: dict[str, Any]) -> list[str]:
        tags = ["development"]
        for category in grouped:
            tags.extend(CATEGORY_TAGS.get(category, []))
        return _unique(tags)

    # --- Status ---

    def get_session_duration(self) -> int:
        """Minutes since monitoring started."""
        if not self.session.start_time:
            return 0
        elapsed = self.clock() - self.session.start_time
        # Halves round up
        return int(elapsed.total_seconds() / 60 + 0.5)

    def get_status(self) -> dict[str, Any]:
        return {
            "is_active": self.is_active,
            "start_time": self.session.start_time,
            "duration": self.get_session_duration(),
            "total_activities": len(self.session.activities),
            "task_completions": len(self.session.task_completions),
            "technical_decisions": len(self.session.technical_decisions),
            "last_log_time": self.session.last_log_time,
        }

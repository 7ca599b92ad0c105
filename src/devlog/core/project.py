"""Project configuration loader for devlog.

A project may carry a devlog.yaml at its root that overrides the change log
location, file naming and vocabulary. Without one, the environment defaults
from devlog.core.config apply.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from devlog.core.config import (
    CATEGORIES,
    CHANGE_LOG_DIR,
    DATE_FORMAT,
    DEFAULT_FILE_HEADER,
    DEPLOYMENTS_DIR,
    DEVLOG_ROOT,
    FILE_FORMAT,
)
from devlog.core.formatter import ProfessionalFormatter
from devlog.core.vocabulary import (
    PROFESSIONAL_HEADERS,
    PROFESSIONAL_PHRASES,
    PROFESSIONAL_TERMS,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when devlog.yaml is invalid."""

    pass


class VocabularyConfig(BaseModel):
    """Additional or replacement vocabulary rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    terms: dict[str, str] = Field(default_factory=dict)
    phrases: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)


class ProjectConfig(BaseModel):
    """Typed configuration loaded from devlog.yaml.

    Frozen to prevent accidental mutation.
    Extra fields are forbidden to catch typos in config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    change_log_dir: str = CHANGE_LOG_DIR
    file_format: str = FILE_FORMAT
    date_format: str = DATE_FORMAT
    file_header: str = DEFAULT_FILE_HEADER
    deployments_dir: str = DEPLOYMENTS_DIR
    categories: list[str] = Field(default_factory=lambda: list(CATEGORIES))
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)


class Project:
    """Loads devlog.yaml and resolves project paths.

    Example:
        project = Project("~/code/shop")
        project.change_log_dir   # ~/code/shop/change-notes
    """

    CONFIG_FILENAME = "devlog.yaml"

    def __init__(self, path: Path | str | None = None):
        """Initialize project with its root directory.

        Args:
            path: Project root (defaults to DEVLOG_ROOT)
        """
        self.root = Path(path or DEVLOG_ROOT).expanduser().resolve()
        self.config_file = self.root / self.CONFIG_FILENAME
        self._config: ProjectConfig | None = None

    def load(self) -> ProjectConfig:
        """Load configuration, falling back to defaults when absent.

        Raises:
            ConfigError: If the config file exists but is not a valid mapping.
        """
        if self._config is not None:
            return self._config

        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}")
            self._config = ProjectConfig()
            return self._config

        logger.debug(f"Loading config from {self.config_file}")
        try:
            with open(self.config_file, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_file}: {e}") from e

        if raw is None:
            self._config = ProjectConfig()
            return self._config

        if not isinstance(raw, dict):
            raise ConfigError(
                f"{self.CONFIG_FILENAME} must be a mapping, got {type(raw).__name__}"
            )

        try:
            self._config = ProjectConfig.model_validate(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid {self.CONFIG_FILENAME}: {e}") from e
        return self._config

    def reload(self) -> ProjectConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    @property
    def exists(self) -> bool:
        """Check if the config file exists."""
        return self.config_file.exists()

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str).expanduser()
        if p.is_absolute():
            return p
        return self.root / p

    @property
    def change_log_dir(self) -> Path:
        return self._resolve(self.load().change_log_dir)

    @property
    def deployments_dir(self) -> Path:
        return self._resolve(self.load().deployments_dir)

    def build_formatter(self) -> ProfessionalFormatter:
        """Create a formatter with the project's vocabulary merged in."""
        vocabulary = self.load().vocabulary
        return ProfessionalFormatter(
            terms={**PROFESSIONAL_TERMS, **vocabulary.terms},
            phrases={**PROFESSIONAL_PHRASES, **vocabulary.phrases},
            headers={
                **PROFESSIONAL_HEADERS,
                **{k.lower(): v for k, v in vocabulary.headers.items()},
            },
        )

    def __repr__(self) -> str:
        return f"Project({self.root})"

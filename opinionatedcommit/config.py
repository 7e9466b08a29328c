"""Configuration management for opinionated-commit."""
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click
import tomli
import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_CONFIG_FILENAME = ".opinionatedcommit.toml"
CONFIG_SECTION = "opinionatedcommit"


class ConfigurationError(click.ClickException):
    """Fatal error in the invocation or its configuration.

    Unlike failed inspections, configuration errors are never suppressed
    by ``dont_throw``.
    """

    exit_code = 2


class Config(BaseModel):
    """Configuration settings for opinionated-commit.

    Settings are resolved once per invocation from, in increasing order of
    precedence, the defaults, the environment, the config file and the
    command line. The resulting object is immutable.
    """

    model_config = ConfigDict(frozen=True)

    allow_one_liners: bool = Field(
        default=False,
        description="Whether a message consisting of only the subject line is accepted"
    )

    enforce_sign_off: bool = Field(
        default=False,
        description="Whether the body must contain a 'Signed-off-by:' line"
    )

    dont_throw: bool = Field(
        default=False,
        description="Whether to report violations without failing the invocation"
    )

    additional_verbs: Optional[str] = Field(
        default=None,
        description="Extra imperative verbs separated by newlines, commas or semicolons"
    )

    path_to_additional_verbs: Optional[str] = Field(
        default=None,
        description="Path to a file listing extra imperative verbs"
    )

    max_subject_length: int = Field(
        default=50,
        gt=0,
        description="Maximum number of characters in the subject line"
    )

    max_body_line_length: int = Field(
        default=72,
        gt=0,
        description="Maximum number of characters in a body line"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always write inspections to a timestamped log file"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @property
    def fail_on_error(self) -> bool:
        return not self.dont_throw

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (relative, no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        return not re.match(r'^[A-Za-z]:', path)

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Directory holding the config file

        Returns:
            Config: Configuration object with values from file or defaults

        Raises:
            ConfigurationError: If the file is malformed or a setting is invalid
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls._create("the environment")

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigurationError(f"Error reading config file {config_path}: {e}") from e

        section = config_data.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Expected a [{CONFIG_SECTION}] table in {config_path}"
            )

        unknown = sorted(set(section) - set(cls.model_fields))
        if unknown:
            raise ConfigurationError(
                f"Unknown settings in {config_path}: {', '.join(unknown)}"
            )

        return cls._create(f"the environment or {config_path}", **section)

    @classmethod
    def _create(cls, origin: str, **data: Any) -> 'Config':
        """Build the configuration, reporting invalid values as configuration errors."""
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings in {origin}: {e}") from e

    def save(self, repo_path: Path) -> Path:
        """Save configuration to the config file.

        Args:
            repo_path: Directory to write the config file to

        Returns:
            Path: Path of the written file
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        # TOML has no null
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        with config_path.open('wb') as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        return config_path

    def override(self, **changes: Any) -> 'Config':
        """Return a copy with the given settings replaced; ``None`` values are ignored."""
        update = {k: v for k, v in changes.items() if v is not None}
        if not update:
            return self
        try:
            return self.__class__(**{**self.model_dump(), **update})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled

        Raises:
            ConfigurationError: If the configured log file is not a safe relative path
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"oc_log-{timestamp}.log")
        elif self.log_file:
            if not self._is_safe_path(self.log_file):
                raise ConfigurationError(f"Unsafe log file path '{self.log_file}'")
            return Path(self.log_file)
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        env_data: Dict[str, Any] = {}

        env_mapping = {
            'OPINIONATED_COMMIT_ALLOW_ONE_LINERS': 'allow_one_liners',
            'OPINIONATED_COMMIT_ENFORCE_SIGN_OFF': 'enforce_sign_off',
            'OPINIONATED_COMMIT_DONT_THROW': 'dont_throw',
            'OPINIONATED_COMMIT_ADDITIONAL_VERBS': 'additional_verbs',
            'OPINIONATED_COMMIT_PATH_TO_ADDITIONAL_VERBS': 'path_to_additional_verbs',
            'OPINIONATED_COMMIT_MAX_SUBJECT_LENGTH': 'max_subject_length',
            'OPINIONATED_COMMIT_MAX_BODY_LINE_LENGTH': 'max_body_line_length',
            'OPINIONATED_COMMIT_ALWAYS_LOG': 'always_log',
            'OPINIONATED_COMMIT_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value: Any = os.environ[env_var]

                # Convert boolean values
                if field_name in ['allow_one_liners', 'enforce_sign_off', 'dont_throw', 'always_log']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Explicit values win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)

"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with SKILLSHELF_ prefix
3. .env file named by SKILLSHELF_ENV_FILE (if set and present)
4. Field defaults
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import skillshelf.constants as constants

LogLevel = _typing.Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Handler installed by the last configure_logging() call
_handler: _logging.Handler | None = None


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    SKILLSHELF_ENV_FILE names it explicitly. If it is set but missing,
    nothing is loaded rather than falling back silently.
    """
    if env_file := _os.environ.get("SKILLSHELF_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    skillshelf configuration settings.

    All settings can be overridden via environment variables with
    SKILLSHELF_ prefix, e.g. SKILLSHELF_SKILLS_ROOT=~/.agent/skills.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SKILLSHELF_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without
        .env interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    skills_root: _pathlib.Path = _pydantic.Field(
        default=_pathlib.Path(constants.DEFAULT_SKILLS_ROOT),
        description="Directory containing one subdirectory per skill",
    )

    body_soft_limit: int = _pydantic.Field(
        default=constants.SKILL_BODY_SOFT_LIMIT,
        ge=1,
        description="Skill body length (lines) above which a warning is logged",
    )

    log_level: LogLevel = _pydantic.Field(
        default="WARNING",
        description="Log level for the skillshelf logger",
    )

    @_pydantic.field_validator("skills_root")
    @classmethod
    def _expand_root(cls, value: _pathlib.Path) -> _pathlib.Path:
        return value.expanduser()

    @_pydantic.field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: _typing.Any) -> _typing.Any:
        if isinstance(value, str):
            return value.upper()
        return value

    def configure_logging(self) -> None:
        """Send skillshelf log records to stderr at the configured level."""
        global _handler

        logger = _logging.getLogger("skillshelf")
        logger.setLevel(self.log_level)
        # Replace our previous handler so it writes to the current stderr
        if _handler is not None:
            logger.removeHandler(_handler)
        _handler = _logging.StreamHandler(_sys.stderr)
        _handler.setFormatter(_logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(_handler)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert settings to dictionary (for JSON output)."""
        return {
            "skills_root": str(self.skills_root),
            "body_soft_limit": self.body_soft_limit,
            "log_level": self.log_level,
        }

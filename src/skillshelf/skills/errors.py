"""
Errors raised and recorded while loading skills.

Only two conditions raise out of the loader and registry:
RootNotFoundError (no root, no registry) and SkillNotFoundError
(lookup of an unknown name). Everything wrong with an individual
skill is captured as a SkillLoadError record instead, so one bad
directory never blocks the rest.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import pathlib as _pathlib
import typing as _typing


class SkillErrorKind(str, _enum.Enum):
    """Category of a per-skill load failure."""

    SKILL_UNREADABLE = "skill_unreadable"
    FRONTMATTER_MALFORMED = "frontmatter_malformed"
    FRONTMATTER_INVALID = "frontmatter_invalid"
    SKILL_VALIDATION_FAILED = "skill_validation_failed"
    SKILL_NAME_MISMATCH = "skill_name_mismatch"
    DUPLICATE_SKILL_NAME = "duplicate_skill_name"


class SkillError(Exception):
    """Base class for skill errors."""

    pass


class RootNotFoundError(SkillError):
    """Raised when the skills root does not exist or cannot be listed."""

    def __init__(self, path: _pathlib.Path, reason: str = "does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Skills root {path} {reason}")


class SkillNotFoundError(SkillError, KeyError):
    """Raised when a registry lookup finds no skill with the exact name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Skill not found: {self.name}"


class SkillContentError(SkillError, ValueError):
    """Raised when a single SKILL.md cannot be turned into a skill."""

    def __init__(self, kind: SkillErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


@_dataclasses.dataclass(frozen=True)
class SkillLoadError:
    """
    A diagnostic for one skill directory that was excluded from a load.

    Errors are kept apart from the registry contents; a caller decides
    whether any of them are fatal.
    """

    kind: SkillErrorKind
    """What went wrong."""

    directory: str
    """Name of the skill directory the error belongs to."""

    path: _pathlib.Path
    """Path of the offending SKILL.md."""

    message: str
    """Human-readable description, naming the failed constraint."""

    other_path: _pathlib.Path | None = None
    """For duplicates, the SKILL.md of the skill that was kept."""

    def __str__(self) -> str:
        return f"{self.directory}: [{self.kind.value}] {self.message}"

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "directory": self.directory,
            "path": str(self.path),
            "message": self.message,
            "other_path": str(self.other_path) if self.other_path else None,
        }

"""
Skill loader: builds a SkillRegistry from one skills root.

Each immediate subdirectory of the root holding a SKILL.md is a
skill. Directories are visited in lexicographic order so that the
error list and duplicate resolution (first loaded wins) are
reproducible. A bad skill is recorded and skipped; only a missing
root aborts the load.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import skillshelf.constants as constants
import skillshelf.skills.errors as skill_errors
import skillshelf.skills.registry as registry_module
import skillshelf.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: the registry plus diagnostics, in discovery order."""

    registry: registry_module.SkillRegistry
    errors: tuple[skill_errors.SkillLoadError, ...] = ()

    @property
    def ok(self) -> bool:
        """True if no skill was rejected."""
        return not self.errors

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            **self.registry.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
        }


class SkillLoader:
    """
    Loads every skill under a root directory.

    The loader holds no state between calls to load(); each call
    reads the file system afresh.
    """

    def __init__(
        self,
        root: _pathlib.Path | str,
        *,
        body_soft_limit: int = constants.SKILL_BODY_SOFT_LIMIT,
    ) -> None:
        """
        Initialize the loader.

        Args:
            root: Directory containing one subdirectory per skill.
            body_soft_limit: Body length (lines) above which a warning is logged.
        """
        self._root = _pathlib.Path(root)
        self._body_soft_limit = body_soft_limit

    @property
    def root(self) -> _pathlib.Path:
        return self._root

    def _list_skill_dirs(self) -> list[_pathlib.Path]:
        """Immediate subdirectories of the root, sorted by name."""
        if not self._root.is_dir():
            reason = "is not a directory" if self._root.exists() else "does not exist"
            raise skill_errors.RootNotFoundError(self._root, reason)
        try:
            entries = list(self._root.iterdir())
        except OSError as e:
            raise skill_errors.RootNotFoundError(
                self._root, f"cannot be read: {e}"
            ) from e
        return sorted((p for p in entries if p.is_dir()), key=lambda p: p.name)

    def _record(
        self,
        found: list[skill_errors.SkillLoadError],
        skill_dir: _pathlib.Path,
        kind: skill_errors.SkillErrorKind,
        message: str,
        other_path: _pathlib.Path | None = None,
    ) -> None:
        error = skill_errors.SkillLoadError(
            kind=kind,
            directory=skill_dir.name,
            path=skill_dir / constants.SKILL_FILENAME,
            message=message,
            other_path=other_path,
        )
        _logger.warning("Skipping skill %s", error)
        found.append(error)

    def load(self) -> LoadResult:
        """
        Load all skills under the root.

        Returns:
            LoadResult with the registry of valid, unique skills and
            the errors recorded for everything else.

        Raises:
            RootNotFoundError: If the root is missing or unreadable.
        """
        skill_dirs = self._list_skill_dirs()
        _logger.debug("Scanning %d directories under %s", len(skill_dirs), self._root)

        loaded: dict[str, skill_module.Skill] = {}
        found: list[skill_errors.SkillLoadError] = []

        for skill_dir in skill_dirs:
            if not (skill_dir / constants.SKILL_FILENAME).is_file():
                continue

            try:
                skill = skill_module.load_skill(skill_dir, check_name=False)
            except FileNotFoundError:
                # Removed between listing and reading
                continue
            except skill_errors.SkillContentError as e:
                self._record(found, skill_dir, e.kind, e.message)
                continue

            # Duplicates are reported before a directory-name mismatch so that
            # a second directory claiming a loaded name is named as the clash.
            previous = loaded.get(skill.name)
            if previous is not None:
                self._record(
                    found,
                    skill_dir,
                    skill_errors.SkillErrorKind.DUPLICATE_SKILL_NAME,
                    f"name {skill.name!r} in {skill.source_path} already loaded "
                    f"from {previous.source_path}",
                    other_path=previous.source_path,
                )
                continue

            try:
                skill_module.check_directory_name(skill.name, skill_dir)
            except skill_errors.SkillContentError as e:
                self._record(found, skill_dir, e.kind, e.message)
                continue

            if skill.exceeds_soft_limit(self._body_soft_limit):
                _logger.warning(
                    "Skill %s exceeds recommended body limit (%d lines > %d)",
                    skill.name,
                    skill.body_line_count,
                    self._body_soft_limit,
                )

            _logger.debug("Loaded skill %s from %s", skill.name, skill.source_path)
            loaded[skill.name] = skill

        return LoadResult(
            registry=registry_module.SkillRegistry(loaded.values(), root=self._root),
            errors=tuple(found),
        )


def load(
    root: _pathlib.Path | str,
    *,
    body_soft_limit: int = constants.SKILL_BODY_SOFT_LIMIT,
) -> LoadResult:
    """
    Load a registry from a skills root.

    Args:
        root: Directory containing one subdirectory per skill.
        body_soft_limit: Body length (lines) above which a warning is logged.

    Returns:
        LoadResult with registry and per-skill errors.

    Raises:
        RootNotFoundError: If the root is missing or unreadable.
    """
    return SkillLoader(root, body_soft_limit=body_soft_limit).load()

"""
Skill registry holding the skills produced by one load.

A registry is an explicit value: load as many as you like from
different roots, they never share state.
"""

from __future__ import annotations

import pathlib as _pathlib
import types as _types
import typing as _typing

import skillshelf.skills.errors as errors
import skillshelf.skills.skill as skill_module


class SkillRegistry:
    """
    Immutable mapping from skill name to Skill.

    Names are unique. Iteration yields skills in lexicographic
    name order and can be repeated.
    """

    def __init__(
        self,
        skills: _typing.Iterable[skill_module.Skill] = (),
        *,
        root: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            skills: Skills to hold. Names must be unique.
            root: Directory the skills were loaded from, if any.

        Raises:
            ValueError: If two skills share a name.
        """
        by_name: dict[str, skill_module.Skill] = {}
        for skill in skills:
            if skill.name in by_name:
                raise ValueError(f"Duplicate skill name: {skill.name}")
            by_name[skill.name] = skill
        self._skills = _types.MappingProxyType(by_name)
        self._root = root

    @property
    def root(self) -> _pathlib.Path | None:
        """Directory the registry was loaded from."""
        return self._root

    @property
    def skills(self) -> _typing.Mapping[str, skill_module.Skill]:
        """Read-only view of name -> Skill."""
        return self._skills

    def get(self, name: str) -> skill_module.Skill:
        """
        Get a skill by exact name.

        Args:
            name: Skill name. No case folding is applied.

        Returns:
            The matching Skill.

        Raises:
            SkillNotFoundError: If no skill has this name.
        """
        try:
            return self._skills[name]
        except KeyError:
            raise errors.SkillNotFoundError(name) from None

    def find(self, name: str) -> skill_module.Skill | None:
        """Get a skill by exact name, or None if absent."""
        return self._skills.get(name)

    def names(self) -> list[str]:
        """Sorted skill names."""
        return sorted(self._skills)

    def iter_skills(self) -> _typing.Iterator[skill_module.Skill]:
        """Yield skills in lexicographic name order."""
        for name in sorted(self._skills):
            yield self._skills[name]

    def list_skills(self) -> list[skill_module.Skill]:
        """List all skills in lexicographic name order."""
        return list(self.iter_skills())

    def __iter__(self) -> _typing.Iterator[skill_module.Skill]:
        return self.iter_skills()

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SkillRegistry):
            return NotImplemented
        return self.list_skills() == other.list_skills()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SkillRegistry(root={self._root!r}, skills={self.names()!r})"

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "root": str(self._root) if self._root else None,
            "skill_count": len(self._skills),
            "skills": [s.to_dict() for s in self.iter_skills()],
        }

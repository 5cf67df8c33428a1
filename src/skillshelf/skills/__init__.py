"""
Agent skills registry.

A skill is a directory holding a SKILL.md file: YAML frontmatter
(name, description, optional fields) followed by Markdown
instructions. Skills live under a single root:

    <root>/<skill-name>/SKILL.md

load() scans the root and returns the registry of valid skills
together with a list of per-skill errors.
"""

from skillshelf.skills.errors import (
    RootNotFoundError,
    SkillContentError,
    SkillError,
    SkillErrorKind,
    SkillLoadError,
    SkillNotFoundError,
)
from skillshelf.skills.loader import LoadResult, SkillLoader, load
from skillshelf.skills.registry import SkillRegistry
from skillshelf.skills.skill import (
    Skill,
    SkillFrontmatter,
    load_skill,
    parse_skill_markdown,
    split_frontmatter,
)

__all__ = [
    # Core
    "Skill",
    "SkillFrontmatter",
    # Parsing
    "load_skill",
    "parse_skill_markdown",
    "split_frontmatter",
    # Loader and Registry
    "LoadResult",
    "SkillLoader",
    "SkillRegistry",
    "load",
    # Errors
    "RootNotFoundError",
    "SkillContentError",
    "SkillError",
    "SkillErrorKind",
    "SkillLoadError",
    "SkillNotFoundError",
]

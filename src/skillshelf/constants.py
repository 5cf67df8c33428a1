"""
Shared constants for skillshelf.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Skill file layout
SKILL_FILENAME = "SKILL.md"
"""File that marks a directory as a skill."""

FRONTMATTER_DELIMITER = "---"
"""Line that opens and closes the frontmatter block."""

# Frontmatter limits
SKILL_NAME_MAX_LENGTH = 64
"""Maximum length of a skill name."""

SKILL_DESCRIPTION_MAX_LENGTH = 1024
"""Maximum length of a skill description."""

SKILL_COMPATIBILITY_MAX_LENGTH = 500
"""Maximum length of the optional compatibility field."""

# Soft limit for SKILL.md body (lines) - matches Anthropic guidance
SKILL_BODY_SOFT_LIMIT = 500
"""Bodies longer than this many lines load with a warning."""

DEFAULT_SKILLS_ROOT = "skills"
"""Skills root used when none is configured, relative to the working directory."""

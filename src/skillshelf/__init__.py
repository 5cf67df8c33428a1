"""
skillshelf - Agent skill registry

Discovers SKILL.md skill directories under a root and loads them
into an immutable, name-keyed registry.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("skillshelf")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "skillshelf Contributors"

from skillshelf.config import Settings  # noqa: E402
from skillshelf.skills import LoadResult, SkillRegistry, load  # noqa: E402

__all__ = ["__version__", "__version_info__", "LoadResult", "Settings", "SkillRegistry", "load"]

"""
Shared pytest fixtures for skillshelf tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import skillshelf.config as config

SkillFactory = _typing.Callable[..., _pathlib.Path]


@_pytest.fixture(autouse=True)
def _reset_skillshelf_logger() -> _typing.Iterator[None]:
    """Drop handlers the CLI attached so they do not outlive the captured stream."""
    yield
    logger = _logging.getLogger("skillshelf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(_logging.NOTSET)


def write_skill(
    root: _pathlib.Path,
    directory: str,
    *,
    name: str | None = None,
    description: str = "Test skill",
    body: str = "",
    extra_frontmatter: str = "",
) -> _pathlib.Path:
    """Create ``root/directory/SKILL.md`` and return the skill directory."""
    skill_dir = root / directory
    skill_dir.mkdir(parents=True, exist_ok=True)
    if not body:
        body = f"\n# {directory}\n\nInstructions for {directory}.\n"
    (skill_dir / "SKILL.md").write_text(
        "---\n"
        f"name: {name if name is not None else directory}\n"
        f"description: {description}\n"
        f"{extra_frontmatter}"
        "---\n"
        f"{body}",
        encoding="utf-8",
    )
    return skill_dir


@_pytest.fixture
def skills_root(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """An empty skills root directory."""
    root = tmp_path / "skills"
    root.mkdir()
    return root


@_pytest.fixture
def make_skill(skills_root: _pathlib.Path) -> SkillFactory:
    """
    Factory creating skill directories under ``skills_root``.

    Usage:
        def test_something(make_skill):
            make_skill("code-review", description="Review code")
    """

    def _make(directory: str, **kwargs: _typing.Any) -> _pathlib.Path:
        return write_skill(skills_root, directory, **kwargs)

    return _make


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with SKILLSHELF_ keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if not k.startswith("SKILLSHELF_")}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env) -> config.Settings:
    """Settings instance isolated from environment and .env file."""
    with isolated_env:
        return config.Settings.construct_without_dotenv()

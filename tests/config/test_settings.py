"""Tests for configuration settings."""

import logging as _logging
import os as _os
import pathlib as _pathlib
import unittest.mock as _mock

import pydantic as _pydantic
import pytest as _pytest

import skillshelf.config as config


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self, clean_settings: config.Settings) -> None:
        assert clean_settings.skills_root == _pathlib.Path("skills")
        assert clean_settings.body_soft_limit == 500
        assert clean_settings.log_level == "WARNING"

    def test_environment_overrides(self, isolated_env) -> None:
        with isolated_env, _mock.patch.dict(
            _os.environ,
            {
                "SKILLSHELF_SKILLS_ROOT": "/opt/skills",
                "SKILLSHELF_BODY_SOFT_LIMIT": "200",
                "SKILLSHELF_LOG_LEVEL": "debug",
            },
        ):
            settings = config.Settings.construct_without_dotenv()

        assert settings.skills_root == _pathlib.Path("/opt/skills")
        assert settings.body_soft_limit == 200
        assert settings.log_level == "DEBUG"

    def test_constructor_overrides_environment(self, isolated_env) -> None:
        with isolated_env, _mock.patch.dict(_os.environ, {"SKILLSHELF_SKILLS_ROOT": "/env"}):
            settings = config.Settings.construct_without_dotenv(skills_root="/arg")
        assert settings.skills_root == _pathlib.Path("/arg")

    def test_home_is_expanded(self, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv(skills_root="~/skills")
        assert settings.skills_root == _pathlib.Path.home() / "skills"

    def test_invalid_log_level_rejected(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(log_level="LOUD")

    def test_soft_limit_must_be_positive(self, isolated_env) -> None:
        with isolated_env, _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(body_soft_limit=0)

    def test_configure_logging_sets_level(self, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv(log_level="INFO")
        settings.configure_logging()
        settings.configure_logging()

        logger = _logging.getLogger("skillshelf")
        assert logger.level == _logging.INFO
        assert len(logger.handlers) == 1

    def test_configure_logging_keeps_other_handlers(self, isolated_env) -> None:
        logger = _logging.getLogger("skillshelf")
        other = _logging.NullHandler()
        logger.addHandler(other)
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()

        settings.configure_logging()
        settings.configure_logging()

        assert other in logger.handlers
        assert len(logger.handlers) == 2

    def test_to_dict(self, clean_settings: config.Settings) -> None:
        assert clean_settings.to_dict() == {
            "skills_root": "skills",
            "body_soft_limit": 500,
            "log_level": "WARNING",
        }

"""
Tests that enforce coding standards.

These tests verify that the codebase follows our import conventions:
modules are imported whole, external ones under a private alias.
"""

import pathlib as _pathlib
import re as _re

import pytest as _pytest

# Directories to check
SRC_DIR = _pathlib.Path(__file__).parent.parent / "src" / "skillshelf"
TESTS_DIR = _pathlib.Path(__file__).parent.parent / "tests"

_IMPORT_RE = _re.compile(r"^import (?P<module>[\w.]+)(?: as (?P<alias>\w+))?\s*(?:#.*)?$")


def _get_python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    """Get all Python files in a directory, recursively, except __init__.py re-exports."""
    return [p for p in directory.rglob("*.py") if p.name != "__init__.py"]


def _extract_from_imports(content: str) -> list[tuple[int, str]]:
    """
    Extract 'from X import Y' statements from file content.

    Returns list of (line_number, line_content) tuples.
    'from __future__ import' and lines inside TYPE_CHECKING blocks are allowed.
    """
    imports: list[tuple[int, str]] = []
    in_type_checking = False

    for i, line in enumerate(content.split("\n"), start=1):
        stripped = line.strip()

        if "if TYPE_CHECKING:" in line or "if _typing.TYPE_CHECKING:" in line:
            in_type_checking = True
            continue

        # End of TYPE_CHECKING block (simplistic detection)
        if in_type_checking and stripped and not line.startswith((" ", "\t", "#")):
            in_type_checking = False

        if in_type_checking:
            continue

        if stripped.startswith("from ") and " import " in stripped:
            if "from __future__ import" in stripped:
                continue
            imports.append((i, stripped))

    return imports


def _external_imports_without_private_alias(content: str) -> list[tuple[int, str]]:
    """Top-level imports of non-skillshelf modules not aliased as '_name'."""
    violations: list[tuple[int, str]] = []
    for i, line in enumerate(content.split("\n"), start=1):
        match = _IMPORT_RE.match(line)
        if match is None:
            continue
        module = match.group("module")
        alias = match.group("alias")
        if module == "skillshelf" or module.startswith("skillshelf."):
            continue
        if alias is None or not alias.startswith("_"):
            violations.append((i, line))
    return violations


class TestImportStyle:
    """Tests for import style compliance."""

    def test_src_no_from_imports(self) -> None:
        """Source files should not use 'from X import Y' pattern."""
        violations = [
            f"{path}:{num}: {line}"
            for path in _get_python_files(SRC_DIR)
            for num, line in _extract_from_imports(path.read_text())
        ]
        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
                + "\n\nUse 'import X as _x' (external) or 'import X as x' (internal) instead."
            )

    def test_tests_no_from_imports(self) -> None:
        """Test files should not use 'from X import Y' pattern."""
        violations = [
            f"{path}:{num}: {line}"
            for path in _get_python_files(TESTS_DIR)
            if path.name != "test_coding_standards.py"
            for num, line in _extract_from_imports(path.read_text())
        ]
        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
            )

    def test_src_external_imports_are_private(self) -> None:
        """External modules are imported as '_name' so they never leak as attributes."""
        violations = [
            f"{path}:{num}: {line}"
            for path in _get_python_files(SRC_DIR)
            for num, line in _external_imports_without_private_alias(path.read_text())
        ]
        if violations:
            _pytest.fail(
                "Found external imports without a private alias:\n"
                + "\n".join(f"  {v}" for v in violations)
            )


class TestImportExtraction:
    """Tests for the import extraction logic itself."""

    def test_detects_from_import(self) -> None:
        imports = _extract_from_imports("from pathlib import Path")
        assert imports == [(1, "from pathlib import Path")]

    def test_allows_future_imports(self) -> None:
        assert _extract_from_imports("from __future__ import annotations") == []

    def test_ignores_type_checking_block(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from some_module import SomeType

def foo():
    pass
"""
        assert _extract_from_imports(content) == []

    def test_detects_import_after_type_checking(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from allowed import Type

from forbidden import Other
"""
        imports = _extract_from_imports(content)
        assert len(imports) == 1
        assert "from forbidden import Other" in imports[0][1]

    def test_alias_check(self) -> None:
        content = "import yaml\nimport yaml as _yaml\nimport skillshelf.constants as constants\n"
        assert _external_imports_without_private_alias(content) == [(1, "import yaml")]

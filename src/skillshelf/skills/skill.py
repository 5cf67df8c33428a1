"""
Skill definition and SKILL.md parsing.

Skills are defined by a SKILL.md file with YAML frontmatter.
The frontmatter contains metadata; the body contains instructions.
"""

from __future__ import annotations

import copy as _copy
import dataclasses as _dataclasses
import pathlib as _pathlib
import types as _types
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import skillshelf.constants as constants
import skillshelf.skills.errors as errors


class SkillFrontmatter(_pydantic.BaseModel):
    """
    Frontmatter parsed from a SKILL.md file.

    Required fields:
    - name: Skill identifier (must match directory name)
    - description: What the skill does AND when to use it

    Optional fields provide additional metadata. Unknown keys are kept
    in ``model_extra`` but not interpreted.
    """

    model_config = _pydantic.ConfigDict(
        extra="allow",
        frozen=True,
    )

    # Required fields
    name: str = _pydantic.Field(
        ...,
        min_length=1,
        max_length=constants.SKILL_NAME_MAX_LENGTH,
        pattern=r"^[a-z0-9-]+$",
        description="Skill name (lowercase, digits, hyphens)",
    )

    description: str = _pydantic.Field(
        ...,
        min_length=1,
        max_length=constants.SKILL_DESCRIPTION_MAX_LENGTH,
        description="What the skill does and when to use it",
    )

    # Optional fields
    license: str | None = _pydantic.Field(
        default=None,
        description="License name or path to a license file",
    )

    compatibility: str | None = _pydantic.Field(
        default=None,
        max_length=constants.SKILL_COMPATIBILITY_MAX_LENGTH,
        description="Environment requirements",
    )

    model: str | None = _pydantic.Field(
        default=None,
        description="Preferred model (sonnet, opus, haiku, ...)",
    )

    allowed_tools: tuple[str, ...] = _pydantic.Field(
        default=(),
        alias="allowed-tools",
        description="Tools pre-approved for use with this skill",
    )

    metadata: _typing.Mapping[str, _typing.Any] = _pydantic.Field(
        default_factory=dict,
        validate_default=True,
        description="Custom metadata for client-specific data",
    )

    @_pydantic.field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    @_pydantic.field_validator("allowed_tools", mode="before")
    @classmethod
    def _split_allowed_tools(cls, value: _typing.Any) -> _typing.Any:
        # Space-delimited string per the SKILL.md format; lists are accepted too
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split())
        return value

    @_pydantic.field_validator("metadata", mode="before")
    @classmethod
    def _empty_metadata(cls, value: _typing.Any) -> _typing.Any:
        # A bare "metadata:" key parses as null
        if value is None:
            return {}
        return value

    @_pydantic.field_validator("metadata")
    @classmethod
    def _freeze_metadata(
        cls, value: _typing.Mapping[str, _typing.Any]
    ) -> _typing.Mapping[str, _typing.Any]:
        return _types.MappingProxyType(dict(value))

    @property
    def extra(self) -> dict[str, _typing.Any]:
        """Unrecognized frontmatter keys, verbatim. Returns a copy."""
        return _copy.deepcopy(dict(self.model_extra or {}))


@_dataclasses.dataclass(frozen=True)
class Skill:
    """
    A parsed skill ready for use.

    Skills are immutable: to change one, edit its SKILL.md and
    load the registry again.
    """

    frontmatter: SkillFrontmatter
    """Parsed frontmatter metadata."""

    body: str
    """Everything after the closing frontmatter delimiter, verbatim."""

    source_path: _pathlib.Path
    """Path to the SKILL.md file this skill was loaded from."""

    @property
    def name(self) -> str:
        """Skill name from frontmatter."""
        return self.frontmatter.name

    @property
    def description(self) -> str:
        """Skill description from frontmatter."""
        return self.frontmatter.description

    @property
    def license(self) -> str | None:
        """Skill license from frontmatter."""
        return self.frontmatter.license

    @property
    def compatibility(self) -> str | None:
        return self.frontmatter.compatibility

    @property
    def model(self) -> str | None:
        return self.frontmatter.model

    @property
    def allowed_tools(self) -> tuple[str, ...]:
        """Pre-approved tools from frontmatter."""
        return self.frontmatter.allowed_tools

    @property
    def metadata(self) -> dict[str, _typing.Any]:
        """Custom metadata from frontmatter. Returns a copy."""
        return _copy.deepcopy(dict(self.frontmatter.metadata))

    @property
    def extra(self) -> dict[str, _typing.Any]:
        return self.frontmatter.extra

    @property
    def skill_dir(self) -> _pathlib.Path:
        """Directory containing SKILL.md."""
        return self.source_path.parent

    @property
    def body_line_count(self) -> int:
        """Number of lines in the skill body."""
        return len(self.body.splitlines())

    def exceeds_soft_limit(self, limit: int = constants.SKILL_BODY_SOFT_LIMIT) -> bool:
        """Whether body is longer than ``limit`` lines."""
        return self.body_line_count > limit

    def list_reference_files(self) -> list[_pathlib.Path]:
        """
        List reference files shipped with the skill.

        Returns files in references/ plus any top-level .md files
        other than SKILL.md, sorted by path.
        """
        refs: list[_pathlib.Path] = []

        refs_dir = self.skill_dir / "references"
        if refs_dir.is_dir():
            for ref_file in refs_dir.iterdir():
                if ref_file.is_file() and not ref_file.name.startswith("."):
                    refs.append(ref_file)

        if self.skill_dir.is_dir():
            for md_file in self.skill_dir.glob("*.md"):
                if md_file.name != constants.SKILL_FILENAME:
                    refs.append(md_file)

        return sorted(refs)

    def list_scripts(self) -> list[_pathlib.Path]:
        """List non-hidden files in the skill's scripts/ directory."""
        scripts: list[_pathlib.Path] = []
        scripts_dir = self.skill_dir / "scripts"
        if scripts_dir.is_dir():
            for script in scripts_dir.iterdir():
                if script.is_file() and not script.name.startswith("."):
                    scripts.append(script)
        return sorted(scripts)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "source_path": str(self.source_path),
            "license": self.license,
            "compatibility": self.compatibility,
            "model": self.model,
            "allowed_tools": list(self.allowed_tools),
            "metadata": self.metadata,
            "extra": self.extra,
            "body_lines": self.body_line_count,
            "reference_files": [str(f) for f in self.list_reference_files()],
            "scripts": [str(s) for s in self.list_scripts()],
        }


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == constants.FRONTMATTER_DELIMITER


def split_frontmatter(content: str) -> tuple[str, str]:
    """
    Split SKILL.md content into its frontmatter block and body.

    The first line must be ``---``; the block runs to the next line
    that is exactly ``---``. The body is everything after that line,
    untouched.

    Raises:
        SkillContentError: FRONTMATTER_MALFORMED if either delimiter is missing.
    """
    lines = content.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        raise errors.SkillContentError(
            errors.SkillErrorKind.FRONTMATTER_MALFORMED,
            "SKILL.md must start with a '---' frontmatter delimiter",
        )

    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return block, body

    raise errors.SkillContentError(
        errors.SkillErrorKind.FRONTMATTER_MALFORMED,
        "frontmatter has no closing '---' delimiter",
    )


def parse_frontmatter(block: str) -> dict[str, _typing.Any]:
    """
    Parse a frontmatter block into a string-keyed mapping.

    Raises:
        SkillContentError: FRONTMATTER_INVALID on YAML errors or a
            non-mapping document.
    """
    # The timestamp constructor raises ValueError for dates like 2024-13-45
    try:
        data = _yaml.safe_load(block)
    except (_yaml.YAMLError, ValueError) as e:
        raise errors.SkillContentError(
            errors.SkillErrorKind.FRONTMATTER_INVALID,
            f"Invalid YAML in frontmatter: {e}",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise errors.SkillContentError(
            errors.SkillErrorKind.FRONTMATTER_INVALID,
            f"frontmatter must be a mapping, got {type(data).__name__}",
        )
    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        raise errors.SkillContentError(
            errors.SkillErrorKind.FRONTMATTER_INVALID,
            f"frontmatter keys must be strings: {bad_keys!r}",
        )
    return data


def _describe_validation_error(exc: _pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "frontmatter"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def validate_frontmatter(data: dict[str, _typing.Any]) -> SkillFrontmatter:
    """
    Validate parsed frontmatter.

    Raises:
        SkillContentError: SKILL_VALIDATION_FAILED naming every failed constraint.
    """
    try:
        return SkillFrontmatter.model_validate(data)
    except _pydantic.ValidationError as e:
        raise errors.SkillContentError(
            errors.SkillErrorKind.SKILL_VALIDATION_FAILED,
            f"Invalid skill frontmatter: {_describe_validation_error(e)}",
        ) from e


def parse_skill_markdown(content: str) -> tuple[SkillFrontmatter, str]:
    """
    Parse a SKILL.md file into frontmatter and body.

    Args:
        content: Raw markdown content.

    Returns:
        Tuple of (frontmatter, body).

    Raises:
        SkillContentError: If frontmatter is missing, malformed or invalid.
    """
    block, body = split_frontmatter(content)
    frontmatter = validate_frontmatter(parse_frontmatter(block))
    return frontmatter, body


def read_skill_file(skill_file: _pathlib.Path) -> str:
    """
    Read a SKILL.md file as UTF-8 text.

    Raises:
        SkillContentError: SKILL_UNREADABLE on I/O or decoding failures.
    """
    try:
        return skill_file.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise errors.SkillContentError(
            errors.SkillErrorKind.SKILL_UNREADABLE,
            f"Cannot read {skill_file}: {e}",
        ) from e


def load_skill(skill_dir: _pathlib.Path, *, check_name: bool = True) -> Skill:
    """
    Load a skill from a directory.

    Args:
        skill_dir: Path to skill directory (must contain SKILL.md).
        check_name: Require the frontmatter name to equal the directory name.

    Returns:
        Parsed Skill instance.

    Raises:
        FileNotFoundError: If SKILL.md doesn't exist.
        SkillContentError: If SKILL.md is unreadable, invalid, or its
            name differs from the directory name.
    """
    skill_file = skill_dir / constants.SKILL_FILENAME
    if not skill_file.is_file():
        raise FileNotFoundError(f"SKILL.md not found: {skill_file}")

    content = read_skill_file(skill_file)
    frontmatter, body = parse_skill_markdown(content)

    if check_name:
        check_directory_name(frontmatter.name, skill_dir)

    return Skill(frontmatter=frontmatter, body=body, source_path=skill_file)


def check_directory_name(name: str, skill_dir: _pathlib.Path) -> None:
    """Raise SKILL_NAME_MISMATCH unless name equals the directory name exactly."""
    if name != skill_dir.name:
        raise errors.SkillContentError(
            errors.SkillErrorKind.SKILL_NAME_MISMATCH,
            f"name {name!r} does not match directory {skill_dir.name!r}",
        )

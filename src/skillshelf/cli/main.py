"""
Main CLI entry point for skillshelf.

Provides the command-line interface using Click.
"""

import json as _json
import pathlib as _pathlib
import typing as _typing

import click as _click

import skillshelf
import skillshelf.config as config
import skillshelf.skills as skills

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

EXIT_SKILL_ERRORS = 1
EXIT_ROOT_NOT_FOUND = 2


def _dump_json(data: _typing.Any) -> None:
    _click.echo(_json.dumps(data, indent=2, default=str))


def _load(ctx: _click.Context) -> skills.LoadResult:
    """Load the registry for the configured root, exiting if the root is missing."""
    settings: config.Settings = ctx.obj["settings"]
    try:
        return skills.load(
            settings.skills_root,
            body_soft_limit=settings.body_soft_limit,
        )
    except skills.RootNotFoundError as e:
        _click.echo(f"Error: {e}", err=True)
        raise SystemExit(EXIT_ROOT_NOT_FOUND) from None


def _echo_errors(load_errors: _typing.Sequence[skills.SkillLoadError]) -> None:
    _click.echo(f"Errors ({len(load_errors)}):", err=True)
    for error in load_errors:
        _click.echo(f"  {error}", err=True)
        if error.other_path is not None:
            _click.echo(f"    kept: {error.other_path}", err=True)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(skillshelf.__version__, "-v", "--version", prog_name="skillshelf")
@_click.option(
    "--root",
    type=_click.Path(path_type=_pathlib.Path),
    default=None,
    help="Skills root directory (default: $SKILLSHELF_SKILLS_ROOT or ./skills)",
)
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@_click.pass_context
def cli(ctx: _click.Context, root: _pathlib.Path | None, verbose: bool) -> None:
    """
    skillshelf - load and inspect agent skills.

    \b
    Examples:
        skillshelf list                    # List loaded skills
        skillshelf show code-review        # Show one skill
        skillshelf check --root ./skills   # Report skills that failed to load
        skillshelf validate ./skills/foo   # Validate a single skill directory
    """
    # Load settings from environment, then override with CLI args
    settings = config.Settings()

    if root is not None:
        settings.skills_root = root.expanduser()
    if verbose:
        settings.log_level = "DEBUG"

    settings.configure_logging()

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def list_cmd(ctx: _click.Context, json_output: bool) -> None:
    """List all loaded skills."""
    settings: config.Settings = ctx.obj["settings"]
    result = _load(ctx)

    if json_output:
        _dump_json(result.to_dict())
        return

    _click.echo(f"Skills root: {settings.skills_root}")
    _click.echo()

    if not len(result.registry):
        _click.echo("No skills found.")
    else:
        _click.echo(f"Loaded Skills ({len(result.registry)}):")
        _click.echo(f"{'Name':<30} {'Lines':<8} {'Description'}")
        _click.echo("-" * 70)
        for s in result.registry:
            limit_warn = " ⚠" if s.exceeds_soft_limit(settings.body_soft_limit) else ""
            summary = s.description.splitlines()[0]
            if len(summary) > 40:
                summary = summary[:37] + "..."
            _click.echo(f"{s.name:<30} {s.body_line_count:<8}{limit_warn} {summary}")

    if result.errors:
        _click.echo()
        _echo_errors(result.errors)


@cli.command(name="show")
@_click.argument("name")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.option("--body", is_flag=True, help="Show full skill body")
@_click.pass_context
def show_cmd(ctx: _click.Context, name: str, json_output: bool, body: bool) -> None:
    """Show details for a specific skill."""
    settings: config.Settings = ctx.obj["settings"]
    result = _load(ctx)

    try:
        skill = result.registry.get(name)
    except skills.SkillNotFoundError as e:
        if json_output:
            _dump_json({"error": str(e)})
        else:
            _click.echo(f"Error: Skill '{name}' not found", err=True)
        raise SystemExit(EXIT_SKILL_ERRORS) from None

    if json_output:
        data = skill.to_dict()
        if body:
            data["body"] = skill.body
        _dump_json(data)
        return

    _click.echo(f"Skill: {skill.name}")
    _click.echo(f"  Description: {skill.description}")
    _click.echo(f"  Path: {skill.source_path}")
    _click.echo(f"  Body lines: {skill.body_line_count}")
    if skill.exceeds_soft_limit(settings.body_soft_limit):
        _click.echo(f"  ⚠ Exceeds recommended limit of {settings.body_soft_limit} lines")
    if skill.license:
        _click.echo(f"  License: {skill.license}")
    if skill.compatibility:
        _click.echo(f"  Compatibility: {skill.compatibility}")
    if skill.model:
        _click.echo(f"  Model: {skill.model}")
    if skill.allowed_tools:
        _click.echo(f"  Allowed tools: {' '.join(skill.allowed_tools)}")
    for key, value in skill.metadata.items():
        _click.echo(f"  metadata.{key}: {value}")

    refs = skill.list_reference_files()
    if refs:
        _click.echo()
        _click.echo("Reference files:")
        for ref in refs:
            _click.echo(f"  - {ref.relative_to(skill.skill_dir)}")

    scripts = skill.list_scripts()
    if scripts:
        _click.echo()
        _click.echo("Scripts:")
        for script in scripts:
            _click.echo(f"  - {script.name}")

    if body:
        _click.echo()
        _click.echo("--- Body ---")
        _click.echo(skill.body)


@cli.command(name="check")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def check_cmd(ctx: _click.Context, json_output: bool) -> None:
    """Load all skills and report those that failed.

    Exits with status 1 if any skill was rejected.
    """
    result = _load(ctx)

    if json_output:
        _dump_json({
            "root": str(result.registry.root),
            "loaded": result.registry.names(),
            "errors": [e.to_dict() for e in result.errors],
        })
    else:
        _click.echo(f"Loaded {len(result.registry)} skill(s) from {result.registry.root}")
        if result.errors:
            _echo_errors(result.errors)
        else:
            _click.echo("✓ No errors")

    if not result.ok:
        raise SystemExit(EXIT_SKILL_ERRORS)


@cli.command(name="validate")
@_click.argument("path", type=_click.Path(path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def validate_cmd(ctx: _click.Context, path: _pathlib.Path, json_output: bool) -> None:
    """Validate a single skill directory."""
    settings: config.Settings = ctx.obj["settings"]

    result: dict[str, _typing.Any] = {
        "path": str(path),
        "valid": False,
        "warnings": [],
        "error": None,
        "kind": None,
    }

    try:
        skill = skills.load_skill(path)
        result["valid"] = True
        result["name"] = skill.name
        result["description"] = skill.description
        result["body_lines"] = skill.body_line_count

        if skill.exceeds_soft_limit(settings.body_soft_limit):
            result["warnings"].append(
                f"Body exceeds recommended limit ({skill.body_line_count} > {settings.body_soft_limit} lines)"
            )
    except FileNotFoundError as e:
        result["error"] = str(e)
    except skills.SkillContentError as e:
        result["error"] = e.message
        result["kind"] = e.kind.value

    if json_output:
        _dump_json(result)
    else:
        _click.echo(f"Skill: {path}")
        if result["error"]:
            _click.echo("  Status: ✗ invalid")
            _click.echo(f"  Error: {result['error']}")
        elif result["warnings"]:
            _click.echo("  Status: ⚠ valid with warnings")
            for warning in result["warnings"]:
                _click.echo(f"  Warning: {warning}")
        else:
            _click.echo("  Status: ✓ valid")
        if result.get("name"):
            _click.echo(f"  Name: {result['name']}")
            _click.echo(f"  Body lines: {result['body_lines']}")

    if not result["valid"]:
        raise SystemExit(EXIT_SKILL_ERRORS)


@cli.command(name="config")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def config_cmd(ctx: _click.Context, json_output: bool) -> None:
    """Show current configuration."""
    settings: config.Settings = ctx.obj["settings"]

    if json_output:
        _dump_json(settings.to_dict())
        return

    _click.echo("skillshelf Configuration")
    _click.echo("=" * 40)
    _click.echo(f"Skills Root: {settings.skills_root}")
    _click.echo(f"Body Soft Limit: {settings.body_soft_limit}")
    _click.echo(f"Log Level: {settings.log_level}")


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="skillshelf")


if __name__ == "__main__":
    main()

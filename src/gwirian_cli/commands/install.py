"""Install command - copy the bundled agent skill into Cursor/Claude skill dirs."""

import shutil
import sys
from pathlib import Path

import click

from ..formatters import print_error

SKILL_NAME = "gwirian-cli"
VALID_TARGETS = ["cursor", "claude", "both"]

TARGET_DIRS = {
    "cursor": ".cursor",
    "claude": ".claude",
}


def get_skills_source_dir() -> Path:
    """Directory holding the bundled skill files."""
    return Path(__file__).resolve().parent.parent / "skills" / SKILL_NAME


def skill_destinations(target: str, base_dir: Path) -> list[tuple[Path, str]]:
    """Destination directories and display labels for a target."""
    names = ["cursor", "claude"] if target == "both" else [target]
    destinations = []
    for name in names:
        label = f"{TARGET_DIRS[name]}/skills/{SKILL_NAME}"
        destinations.append((base_dir / TARGET_DIRS[name] / "skills" / SKILL_NAME, label))
    return destinations


@click.command("install")
@click.option("--skills", is_flag=True, help="Install the gwirian-cli skill")
@click.option(
    "-t",
    "--target",
    default="both",
    help="Target directory: cursor, claude, or both (default: both)",
)
@click.option(
    "-g",
    "--global",
    "global_install",
    is_flag=True,
    help="Install to user global skills dir (~/.cursor/skills and/or ~/.claude/skills)",
)
def install_command(skills: bool, target: str, global_install: bool) -> None:
    """Install gwirian-cli skill for Cursor and/or Claude."""
    if not skills:
        click.echo("Use --skills to install the gwirian-cli skill.")
        return

    target = target.lower()
    if target not in VALID_TARGETS:
        print_error(
            f'Invalid --target "{target}". Use one of: {", ".join(VALID_TARGETS)}.',
            title="Install",
        )
        sys.exit(1)

    source_dir = get_skills_source_dir()
    if not source_dir.exists():
        print_error(
            "Skill files not found. Reinstall the gwirian-cli package.",
            title="Install",
        )
        sys.exit(1)

    base_dir = Path.home() if global_install else Path.cwd()
    for dest, label in skill_destinations(target, base_dir):
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source_dir, dest, dirs_exist_ok=True)
        click.echo(f"Skill installed to {label}")

"""Shared fixtures for catalog tests."""

import json
import textwrap
from pathlib import Path
from types import SimpleNamespace

import pytest


def write_command(collection_dir: Path, name: str, body: str, header: str = "") -> Path:
    path = collection_dir / "commands" / f"{name}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    text = textwrap.dedent(body).strip()
    if header:
        text = f"---\n{textwrap.dedent(header).strip()}\n---\n\n{text}"
    path.write_text(text + "\n", encoding="utf-8")
    return path


def write_skill(
    collection_dir: Path, dirname: str, header: str, body: str = "Follow the steps."
) -> Path:
    path = collection_dir / "skills" / dirname / "SKILL.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"---\n{textwrap.dedent(header).strip()}\n---\n\n{textwrap.dedent(body).strip()}\n",
        encoding="utf-8",
    )
    return path


def write_plugin_manifest(collection_dir: Path, **fields) -> Path:
    path = collection_dir / ".claude-plugin" / "plugin.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


@pytest.fixture
def catalog_root(tmp_path) -> Path:
    """Two collections: 'development' (commands) and 'frontend' (skills + a command)."""
    root = tmp_path / "plugins"

    development = root / "development"
    write_command(
        development,
        "create-plan",
        """
        # Create an implementation plan

        Write a plan for: $ARGUMENTS
        """,
    )
    write_command(
        development,
        "commit",
        "Stage and commit the current changes.",
        header="""
        description: Create a git commit
        argument-hint: "[message]"
        """,
    )
    write_plugin_manifest(
        development,
        name="development",
        version="1.2.0",
        description="Everyday development commands",
        commands=["./commands/create-plan.md", "./commands/commit.md"],
    )

    frontend = root / "frontend"
    write_skill(
        frontend,
        "form-builder",
        """
        name: form-builder
        description: Generate a validated form component.
        """,
        "Build the form with the project's UI toolkit.",
    )
    write_skill(
        frontend,
        "ui-setup",
        """
        name: ui-setup
        description: Configure the UI toolkit for a new project.
        """,
    )
    write_command(
        frontend,
        "new-page",
        "Scaffold a page named $ARGUMENTS.",
        header="""
        description: Scaffold a frontend page
        requires-skills:
          - ui-setup
        """,
    )
    return root


@pytest.fixture
def writers() -> SimpleNamespace:
    """File writers for building collections inside a test."""
    return SimpleNamespace(
        command=write_command,
        skill=write_skill,
        manifest=write_plugin_manifest,
    )

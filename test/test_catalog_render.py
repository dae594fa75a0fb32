"""Tests for skill/command listings and prompt templates."""

from pathlib import Path

from catalog import Document, InvocationMode, render_commands_section, render_skills_section
from catalog.render import render_skill_prompt, render_template


def _skill(name: str, collection: str = "frontend", description: str = "Does things.") -> Document:
    return Document(
        name=name,
        description=description,
        invocation_mode=InvocationMode.SKILL,
        body="",
        collection=collection,
        path=Path(f"/plugins/{collection}/skills/{name}/SKILL.md"),
    )


def test_render_skills_section_empty() -> None:
    """Empty skills list returns None."""
    assert render_skills_section([]) is None


def test_render_skills_section_single() -> None:
    result = render_skills_section(
        [_skill("form-builder", description="Generate a validated form component.")]
    )

    assert result is not None
    assert "## Skills" in result
    assert "### Available skills" in result
    assert "- frontend:form-builder: Generate a validated form component." in result
    assert "(file: /plugins/frontend/skills/form-builder/SKILL.md)" in result
    assert "### How to use skills" in result
    assert "Trigger rules:" in result


def test_render_skills_section_sorted_by_qualified_name() -> None:
    result = render_skills_section(
        [
            _skill("zed-tool", "backend"),
            _skill("alpha-tool", "frontend"),
            _skill("mid", "backend"),
        ]
    )

    assert result is not None
    assert result.find("backend:mid") < result.find("backend:zed-tool") < result.find(
        "frontend:alpha-tool"
    )


def test_render_commands_section_groups_by_collection() -> None:
    commands = [
        Document(
            "commit", "Create a git commit", InvocationMode.COMMAND, "", "dev", Path("a"), "[message]"
        ),
        Document("create-plan", "", InvocationMode.COMMAND, "", "dev", Path("b")),
        Document("api-docs", "Write API docs", InvocationMode.COMMAND, "", "docs", Path("c")),
    ]

    result = render_commands_section(commands)

    assert result is not None
    assert result.splitlines() == [
        "## Commands",
        "### dev",
        "- `/commit [message]`: Create a git commit",
        "- `/create-plan`",
        "### docs",
        "- `/api-docs`: Write API docs",
    ]
    assert render_commands_section([]) is None


def test_render_template_arguments() -> None:
    assert render_template("Plan for $ARGUMENTS now", "login page") == "Plan for login page now"
    assert render_template("Commit the changes.", "") == "Commit the changes."
    assert render_template("Commit the changes.\n", "fix typo") == (
        "Commit the changes.\n\nARGUMENTS: fix typo"
    )
    assert render_template("", "fix typo") == "ARGUMENTS: fix typo"


def test_render_skill_prompt() -> None:
    assert render_skill_prompt("lint", "  Run lint.  ", "src/") == (
        "SKILL: lint\n\nRun lint.\n\nARGUMENTS: src/"
    )
    assert render_skill_prompt("lint", "", "") == "SKILL: lint"


def test_render_commands_section_qualifies_shared_names() -> None:
    commands = [
        Document("commit", "Commit (dev)", InvocationMode.COMMAND, "", "dev", Path("a")),
        Document("lint", "", InvocationMode.COMMAND, "", "dev", Path("b")),
        Document("commit", "Commit (ops)", InvocationMode.COMMAND, "", "ops", Path("c"), "[msg]"),
    ]

    result = render_commands_section(commands)

    assert result is not None
    assert result.splitlines() == [
        "## Commands",
        "### dev",
        "- `/dev:commit`: Commit (dev)",
        "- `/lint`",
        "### ops",
        "- `/ops:commit [msg]`: Commit (ops)",
    ]

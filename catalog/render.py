"""Render registry listings and prompts for the host."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .types import Document

SKILLS_USAGE_RULES = """\
- Discovery: The list above shows skills available in this session (qualified name + description + file path). Skill bodies live on disk at the listed paths.
- Trigger rules: If the user names a skill (with `$SkillName` or plain text) OR the task clearly matches a skill's description shown above, you must use that skill for that turn. Multiple mentions mean use them all. Do not carry skills across turns unless re-mentioned.
- Missing/blocked: If a named skill isn't in the list or the path can't be read, say so briefly and continue with the best fallback.
- How to use a skill:
  1) After deciding to use a skill, open its `SKILL.md`. Read only enough to follow the workflow.
  2) When `SKILL.md` references relative paths, resolve them relative to the skill directory.
  3) Load extra reference files only when the request needs them.
- Coordination: If multiple skills apply, choose the minimal set that covers the request and state the order you'll use them."""


def render_template(template: str, arguments: str) -> str:
    if "$ARGUMENTS" in template:
        return template.replace("$ARGUMENTS", arguments)
    if not arguments:
        return template
    suffix = f"\n\nARGUMENTS: {arguments}" if template.strip() else f"ARGUMENTS: {arguments}"
    return f"{template.rstrip()}{suffix}"


def render_skill_prompt(name: str, body: str, arguments: str) -> str:
    parts = [f"SKILL: {name}", body.strip()]
    if arguments:
        parts.append(f"ARGUMENTS: {arguments}")
    return "\n\n".join(part for part in parts if part)


def render_skills_section(skills: Sequence[Document]) -> str | None:
    """Render available skills as a system prompt section.

    Args:
        skills: Skill documents to advertise.

    Returns:
        Formatted markdown section, or None if no skills available.
    """
    if not skills:
        return None

    lines: list[str] = []
    lines.append("## Skills")
    lines.append(
        "A skill is a set of local instructions to follow that is stored in a `SKILL.md` file. "
        "Below is the list of skills that can be used. Each entry includes a name, description, "
        "and file path so you can open the source for full instructions when using a specific skill."
    )
    lines.append("### Available skills")

    for skill in sorted(skills, key=lambda s: s.qualified_name):
        path_str = str(skill.path).replace("\\", "/")
        lines.append(f"- {skill.qualified_name}: {skill.description} (file: {path_str})")

    lines.append("### How to use skills")
    lines.append(SKILLS_USAGE_RULES)

    return "\n".join(lines)


def render_commands_section(commands: Sequence[Document]) -> str | None:
    """Render slash commands as a help listing, grouped by collection."""
    if not commands:
        return None

    shared = {name for name, count in Counter(c.name for c in commands).items() if count > 1}
    lines: list[str] = ["## Commands"]
    current = None
    for command in commands:
        if command.collection != current:
            current = command.collection
            lines.append(f"### {current}")
        # Names shared across collections only resolve when qualified
        name = command.qualified_name if command.name in shared else command.name
        usage = f"/{name}"
        if command.argument_hint:
            usage = f"{usage} {command.argument_hint}"
        description = f": {command.description}" if command.description else ""
        lines.append(f"- `{usage}`{description}")
    return "\n".join(lines)

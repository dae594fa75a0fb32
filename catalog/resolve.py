"""Turn `/command` and `$skill` invocations into prompt text."""

from __future__ import annotations

from utils import get_logger

from .errors import AmbiguousNameError, NotFoundError
from .parser import split_invocation
from .registry import Registry
from .render import render_skill_prompt, render_template
from .types import InvocationMode, ResolvedInput

logger = get_logger(__name__)

COMMAND_PREFIX = "/"
SKILL_PREFIX = "$"


def resolve_invocation(registry: Registry, user_input: str) -> ResolvedInput:
    """Resolve an explicit invocation against the registry.

    Unknown names and plain text pass through unchanged. A bare name defined
    by several collections raises AmbiguousNameError; qualify it as
    `collection:name`.
    """
    if user_input.startswith(SKILL_PREFIX):
        name, args = split_invocation(user_input, SKILL_PREFIX)
        try:
            skill = registry.find_by_name(name, InvocationMode.SKILL)
        except NotFoundError:
            return ResolvedInput(user_input, user_input, None, None, args)
        rendered = render_skill_prompt(skill.name, skill.body, args)
        return ResolvedInput(user_input, rendered, None, skill.qualified_name, args)

    if user_input.startswith(COMMAND_PREFIX):
        name, args = split_invocation(user_input, COMMAND_PREFIX)
        try:
            command = registry.find_by_name(name, InvocationMode.COMMAND)
        except NotFoundError:
            return ResolvedInput(user_input, user_input, None, None, args)

        sections: list[str] = []
        for skill_name in command.requires_skills:
            skill = _required_skill(registry, command.collection, skill_name)
            if skill is None:
                logger.warning(f"Missing required skill '{skill_name}' for /{command.name}")
                continue
            sections.append(render_skill_prompt(skill.name, skill.body, ""))

        sections.append(render_template(command.body, args))
        rendered = "\n\n".join(s for s in sections if s)
        return ResolvedInput(user_input, rendered, command.qualified_name, None, args)

    return ResolvedInput(user_input, user_input, None, None, "")


def _required_skill(registry: Registry, collection: str, name: str):
    # Prefer the command's own collection before searching the rest
    local = registry.get_collection(collection).get(name)
    if local is not None and local.is_skill:
        return local
    try:
        return registry.find_by_name(name, InvocationMode.SKILL)
    except NotFoundError:
        return None
    except AmbiguousNameError as e:
        logger.warning(f"Required skill '{name}' is ambiguous: {e}")
        return None

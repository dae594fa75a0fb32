"""Main entry point for the skillbook command-line tool."""

import argparse
import asyncio
import importlib.metadata
from pathlib import Path

from catalog import (
    InvocationMode,
    NotFoundError,
    RegistryError,
    install_collection,
    load_registry,
    render_commands_section,
    render_skills_section,
    resolve_invocation,
    uninstall_collection,
)
from catalog.installer import is_git_url
from config import Config
from utils import get_log_file_path, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillbook",
        description="Browse and resolve command/skill collections for an AI coding assistant",
    )

    try:
        version = importlib.metadata.version("skillbook")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"skillbook {version}")

    parser.add_argument(
        "--root",
        "-r",
        type=str,
        default=None,
        help="Directory holding one subdirectory per collection (default: PLUGINS_DIR)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on malformed documents instead of skipping them",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.skillbook/logs/",
    )

    sub = parser.add_subparsers(dest="command")

    list_parser = sub.add_parser("list", help="List collections, or the documents of one")
    list_parser.add_argument("collection", nargs="?", help="Collection to list")

    show_parser = sub.add_parser("show", help="Show a document")
    show_parser.add_argument("ref", help="'collection:name', 'collection name', or a bare name")
    show_parser.add_argument("name", nargs="?", help="Document name when ref is a collection")

    sub.add_parser("check", help="Report every malformed document and manifest")

    prompt_parser = sub.add_parser("prompt", help="Print the skills section for a system prompt")
    prompt_parser.add_argument(
        "--commands", action="store_true", help="Print the commands listing instead"
    )

    resolve_parser = sub.add_parser("resolve", help="Resolve a /command or $skill invocation")
    resolve_parser.add_argument("text", nargs=argparse.REMAINDER, help="Invocation text")

    install_parser = sub.add_parser("install", help="Install a collection from a path or git URL")
    install_parser.add_argument("source", help="Local directory or git URL (optional #subdir)")

    uninstall_parser = sub.add_parser("uninstall", help="Remove an installed collection")
    uninstall_parser.add_argument("name", help="Collection name")

    return parser


async def _list(root: Path, strict: bool, collection: str | None) -> int:
    registry = await load_registry(root, strict=strict)
    terminal_ui.print_load_warnings(registry.warnings)
    if collection:
        terminal_ui.print_documents(collection, registry.list_documents(collection))
    else:
        terminal_ui.print_collections(registry.collections)
    return 0


async def _show(root: Path, strict: bool, ref: str, name: str | None) -> int:
    registry = await load_registry(root, strict=strict)
    if name:
        document = registry.find(ref, name)
    else:
        document = registry.find_by_name(ref)
    terminal_ui.print_document(document)
    return 0


async def _check(root: Path) -> int:
    terminal_ui.print_header("Checking collections", str(root))
    # Non-strict so every skipped document is reported, not just the first
    registry = await load_registry(root, strict=False)
    terminal_ui.print_load_warnings(registry.warnings)
    documents = registry.documents()
    if registry.warnings:
        terminal_ui.print_error(
            f"{len(registry.warnings)} problem(s) found in {len(registry)} collection(s)",
            title="Check Failed",
        )
        return 1
    terminal_ui.print_success(
        f"{len(registry)} collection(s), {len(documents)} document(s), no problems found"
    )
    return 0


async def _prompt(root: Path, strict: bool, commands: bool) -> int:
    registry = await load_registry(root, strict=strict)
    if commands:
        section = render_commands_section(registry.commands())
    else:
        section = render_skills_section(registry.skills())
    if section is None:
        kind = "commands" if commands else "skills"
        terminal_ui.print_warning(f"No {kind} found in {root}")
        return 1
    print(section)
    return 0


async def _resolve(root: Path, strict: bool, text: str) -> int:
    registry = await load_registry(root, strict=strict)
    resolved = resolve_invocation(registry, text)
    if resolved.invoked_command is None and resolved.invoked_skill is None:
        if text.startswith(("/", "$")):
            terminal_ui.print_warning(f"No command or skill matches: {text.split()[0]}")
    print(resolved.rendered)
    return 0


async def _install(root: Path, source: str) -> int:
    if is_git_url(source):
        terminal_ui.print_info(f"Cloning {source}")
    collection = await install_collection(source, root)
    skills = sum(1 for doc in collection.documents if doc.invocation_mode is InvocationMode.SKILL)
    terminal_ui.print_success(
        f"Installed '{collection.name}' ({len(collection.documents) - skills} command(s), "
        f"{skills} skill(s)) to {collection.path}"
    )
    return 0


async def _uninstall(root: Path, name: str) -> int:
    removed = await uninstall_collection(name, root)
    terminal_ui.print_success(f"Uninstalled '{name}' from {removed}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Initialize runtime directories (create logs dir only in verbose mode)
    ensure_runtime_dirs(create_logs=args.verbose)

    # Initialize logging only in verbose mode
    if args.verbose:
        setup_logger()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        return 2

    root = Path(args.root or Config.PLUGINS_DIR).expanduser()
    strict = Config.STRICT_LOAD if args.strict is None else args.strict
    command = args.command or "list"

    if command == "list":
        coro = _list(root, strict, getattr(args, "collection", None))
    elif command == "show":
        coro = _show(root, strict, args.ref, args.name)
    elif command == "check":
        coro = _check(root)
    elif command == "prompt":
        coro = _prompt(root, strict, args.commands)
    elif command == "resolve":
        text = " ".join(args.text).strip()
        if not text:
            terminal_ui.print_error("Nothing to resolve", title="Invalid Arguments")
            return 2
        coro = _resolve(root, strict, text)
    elif command == "install":
        coro = _install(root, args.source)
    else:
        coro = _uninstall(root, args.name)

    try:
        code = asyncio.run(coro)
    except NotFoundError as e:
        terminal_ui.print_error(str(e), title="Not Found")
        code = 1
    except RegistryError as e:
        terminal_ui.print_error(str(e), title=type(e).__name__)
        code = 1

    log_file = get_log_file_path()
    if args.verbose and log_file:
        terminal_ui.print_log_location(log_file)
    return code


if __name__ == "__main__":
    raise SystemExit(main())

"""Tests for discovering collections and documents on disk."""

import json
import os

import pytest

from catalog import (
    DuplicateNameError,
    InvocationMode,
    MalformedDocumentError,
    RegistryLoader,
    load_registry,
)


@pytest.mark.asyncio
async def test_listing_follows_discovery_order(catalog_root) -> None:
    registry = await load_registry(catalog_root)

    summaries = registry.list_documents("development")
    assert [s.name for s in summaries] == ["create-plan", "commit"]
    assert all(s.invocation_mode is InvocationMode.COMMAND for s in summaries)


@pytest.mark.asyncio
async def test_collections_without_manifest_are_sorted(catalog_root) -> None:
    registry = await load_registry(catalog_root)

    assert registry.collection_names() == ["development", "frontend"]
    assert [d.name for d in registry.get_collection("frontend").documents] == [
        "new-page",
        "form-builder",
        "ui-setup",
    ]


@pytest.mark.asyncio
async def test_load_is_idempotent(catalog_root) -> None:
    first = await load_registry(catalog_root)
    second = await load_registry(catalog_root)

    assert first == second
    assert first is not second


@pytest.mark.asyncio
async def test_document_metadata(catalog_root) -> None:
    registry = await load_registry(catalog_root)

    commit = registry.find("development", "commit")
    assert commit.description == "Create a git commit"
    assert commit.argument_hint == "[message]"
    assert commit.body == "Stage and commit the current changes."
    assert commit.collection == "development"

    # No header: description falls back to the first line of the body
    plan = registry.find("development", "create-plan")
    assert plan.description == "Create an implementation plan"

    page = registry.find("frontend", "new-page")
    assert page.requires_skills == ("ui-setup",)

    skill = registry.find("frontend", "form-builder")
    assert skill.invocation_mode is InvocationMode.SKILL
    assert skill.body == "Build the form with the project's UI toolkit."
    assert skill.path.name == "SKILL.md"

    manifest = registry.get_collection("development").manifest
    assert manifest.version == "1.2.0"
    assert manifest.description == "Everyday development commands"


@pytest.mark.asyncio
async def test_duplicate_skill_names_raise(tmp_path, writers) -> None:
    collection = tmp_path / "frontend"
    writers.skill(collection, "a", "name: forms\ndescription: First.")
    writers.skill(collection, "b", "name: forms\ndescription: Second.")

    with pytest.raises(DuplicateNameError) as exc_info:
        await load_registry(tmp_path)

    assert exc_info.value.name == "forms"
    assert exc_info.value.collection == "frontend"


@pytest.mark.asyncio
async def test_command_and_skill_sharing_a_name_raise(tmp_path, writers) -> None:
    collection = tmp_path / "tools"
    writers.command(collection, "lint", "Run the linter.")
    writers.skill(collection, "lint", "name: lint\ndescription: Lint the code.")

    with pytest.raises(DuplicateNameError):
        await load_registry(tmp_path)


@pytest.mark.asyncio
async def test_duplicate_collection_names_raise(tmp_path, writers) -> None:
    for dirname in ("one", "two"):
        writers.command(tmp_path / dirname, "hello", "Say hello.")
        writers.manifest(tmp_path / dirname, name="shared")

    with pytest.raises(DuplicateNameError):
        await load_registry(tmp_path)


@pytest.mark.asyncio
async def test_skill_missing_description_is_skipped(tmp_path, writers) -> None:
    collection = tmp_path / "frontend"
    broken = writers.skill(collection, "broken", "name: broken")
    writers.skill(collection, "ok", "name: ok\ndescription: Works.")
    writers.command(collection, "page", "Make a page.")

    registry = await load_registry(tmp_path)

    assert registry.get_collection("frontend").names() == ["page", "ok"]
    assert len(registry.warnings) == 1
    assert registry.warnings[0].path == broken
    assert "description" in registry.warnings[0].message


@pytest.mark.asyncio
async def test_skill_without_frontmatter_is_skipped(tmp_path, writers) -> None:
    collection = tmp_path / "frontend"
    path = collection / "skills" / "plain" / "SKILL.md"
    path.parent.mkdir(parents=True)
    path.write_text("Just text, no header.\n")
    writers.skill(collection, "ok", "name: ok\ndescription: Works.")

    registry = await load_registry(tmp_path)

    assert registry.get_collection("frontend").names() == ["ok"]
    assert "'name' and 'description'" in registry.warnings[0].message


@pytest.mark.asyncio
async def test_strict_mode_raises_malformed(tmp_path, writers) -> None:
    writers.skill(tmp_path / "frontend", "broken", "name: broken")

    with pytest.raises(MalformedDocumentError):
        await RegistryLoader(tmp_path, strict=True).load()


@pytest.mark.asyncio
async def test_empty_and_missing_collections_are_omitted(tmp_path, writers) -> None:
    (tmp_path / "empty").mkdir()
    (tmp_path / ".hidden").mkdir()
    writers.command(tmp_path / ".hidden", "secret", "Not a collection.")
    writers.command(tmp_path / "real", "hello", "Say hello.")

    registry = await load_registry(tmp_path)
    assert registry.collection_names() == ["real"]
    assert registry.warnings == ()

    missing = await load_registry(tmp_path / "does-not-exist")
    assert len(missing) == 0


@pytest.mark.asyncio
async def test_unreadable_document_is_skipped(tmp_path, writers) -> None:
    collection = tmp_path / "tools"
    writers.command(collection, "good", "Fine.")
    bad = collection / "commands" / "bad.md"
    bad.write_bytes(b"\xff\xfe\x00 not utf-8")

    registry = await load_registry(tmp_path)

    assert registry.get_collection("tools").names() == ["good"]
    assert registry.warnings[0].path == bad


@pytest.mark.asyncio
async def test_flat_collection_uses_top_level_markdown(tmp_path, writers) -> None:
    collection = tmp_path / "docs"
    collection.mkdir()
    (collection / "README.md").write_text("# About this collection\n")
    (collection / "write-tests.md").write_text("# Write tests\n\nCover the happy path.\n")
    (collection / "api-docs.md").write_text("Document the API.\n")

    registry = await load_registry(tmp_path)

    assert registry.get_collection("docs").names() == ["api-docs", "write-tests"]
    assert registry.find("docs", "write-tests").description == "Write tests"


@pytest.mark.asyncio
async def test_invalid_plugin_manifest_omits_collection(tmp_path, writers) -> None:
    collection = tmp_path / "broken"
    writers.command(collection, "hello", "Say hello.")
    manifest = collection / ".claude-plugin" / "plugin.json"
    manifest.parent.mkdir(parents=True)
    manifest.write_text("{not json")
    writers.command(tmp_path / "fine", "hello", "Say hello.")

    registry = await load_registry(tmp_path)

    assert registry.collection_names() == ["fine"]
    assert registry.warnings[0].path == manifest


@pytest.mark.asyncio
async def test_manifest_listed_path_missing_warns(tmp_path, writers) -> None:
    collection = tmp_path / "dev"
    writers.command(collection, "commit", "Commit.")
    writers.manifest(collection, commands=["./commands/commit.md", "./commands/gone.md"])

    registry = await load_registry(tmp_path)

    assert registry.get_collection("dev").names() == ["commit"]
    assert "not found" in registry.warnings[0].message


@pytest.mark.asyncio
async def test_marketplace_controls_collections(tmp_path, writers) -> None:
    writers.command(tmp_path / "plugins" / "b-dev", "commit", "Commit.")
    writers.command(tmp_path / "plugins" / "a-docs", "api-docs", "Document the API.")
    writers.command(tmp_path / "unlisted", "ignored", "Not in the marketplace.")
    marketplace = tmp_path / ".claude-plugin" / "marketplace.json"
    marketplace.parent.mkdir()
    marketplace.write_text(
        json.dumps(
            {
                "name": "team-tools",
                "plugins": [
                    {"name": "development", "source": "./plugins/b-dev"},
                    {"name": "documentation", "source": "./plugins/a-docs"},
                    {"name": "remote", "source": {"source": "github", "repo": "org/remote"}},
                ],
            }
        )
    )

    registry = await load_registry(tmp_path)

    assert registry.collection_names() == ["development", "documentation"]
    assert registry.find("development", "commit").collection == "development"
    assert len(registry.warnings) == 1
    assert "remote" in registry.warnings[0].message


requires_permissions = pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="directory permissions are not enforced for root",
)


@requires_permissions
@pytest.mark.asyncio
async def test_unreadable_skills_directory_omits_collection(tmp_path, writers) -> None:
    locked = tmp_path / "locked"
    writers.skill(
        locked,
        "form-builder",
        """
        name: form-builder
        description: Generate a validated form component.
        """,
    )
    writers.command(tmp_path / "open", "commit", "Commit.")
    skills_dir = locked / "skills"
    skills_dir.chmod(0)
    try:
        registry = await load_registry(tmp_path)
    finally:
        skills_dir.chmod(0o755)

    assert registry.collection_names() == ["open"]
    assert registry.warnings[0].path == locked
    assert "unreadable collection" in registry.warnings[0].message


@requires_permissions
@pytest.mark.asyncio
async def test_unreadable_root_yields_empty_registry(tmp_path, writers) -> None:
    root = tmp_path / "plugins"
    writers.command(root / "dev", "commit", "Commit.")
    root.chmod(0)
    try:
        registry = await load_registry(root)
    finally:
        root.chmod(0o755)

    assert len(registry) == 0
    assert registry.warnings[0].path == root


@pytest.mark.asyncio
async def test_manifest_path_with_nul_byte_omits_collection(tmp_path, writers) -> None:
    bad = tmp_path / "bad"
    writers.command(bad, "commit", "Commit.")
    manifest = writers.manifest(bad, commands=["./commands/commit\0.md"])
    writers.command(tmp_path / "good", "commit", "Commit.")

    registry = await load_registry(tmp_path)

    assert registry.collection_names() == ["good"]
    assert registry.warnings[0].path == manifest
    assert "NUL" in registry.warnings[0].message

    with pytest.raises(MalformedDocumentError):
        await load_registry(tmp_path, strict=True)

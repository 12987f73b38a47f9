"""Tests for ActionCollectionRepository against an in-memory database."""

from datetime import datetime, timezone

import pytest

from actionbase.domain.entities import ActionCollection, ActionCollectionDTO, ActionDTO
from actionbase.infrastructure.persistence.repositories import ActionCollectionRepository


@pytest.fixture
def collection_repo(db_session):
    return ActionCollectionRepository(db_session)


def _collection(name="utils", page_id="page1", application_id="app1", **state) -> ActionCollection:
    return ActionCollection(
        application_id=application_id,
        organization_id="org1",
        unpublished_collection=ActionCollectionDTO(
            name=name,
            page_id=page_id,
            application_id=application_id,
            organization_id="org1",
            plugin_id="js-plugin",
            **state,
        ),
    )


@pytest.mark.asyncio
async def test_save_assigns_id_and_round_trips(collection_repo):
    collection = _collection(body="export default {}", action_ids={"a1", "a2"})

    saved = await collection_repo.save(collection)
    loaded = await collection_repo.get_by_id(saved.id)

    assert saved.id is not None
    assert loaded.id == saved.id
    assert loaded.unpublished_collection.name == "utils"
    assert loaded.unpublished_collection.action_ids == {"a1", "a2"}
    assert loaded.published_collection is None
    assert loaded.created_at is not None


@pytest.mark.asyncio
async def test_save_never_persists_resolved_actions(collection_repo):
    collection = _collection(action_ids={"a1"})
    collection.unpublished_collection.actions = [ActionDTO(id="a1", name="run")]

    saved = await collection_repo.save(collection)
    loaded = await collection_repo.get_by_id(saved.id)

    assert loaded.unpublished_collection.actions == []
    assert loaded.unpublished_collection.action_ids == {"a1"}


@pytest.mark.asyncio
async def test_update_keeps_id_and_creation_time(collection_repo):
    saved = await collection_repo.save(_collection())
    created_at = saved.created_at

    saved.unpublished_collection.name = "helpers"
    await collection_repo.save(saved)
    loaded = await collection_repo.get_by_id(saved.id)

    assert loaded.unpublished_collection.name == "helpers"
    assert loaded.created_at == created_at


@pytest.mark.asyncio
async def test_get_by_id_missing(collection_repo):
    assert await collection_repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_find_by_name_and_page_ids(collection_repo):
    await collection_repo.save(_collection(name="utils", page_id="page1"))
    await collection_repo.save(_collection(name="utils", page_id="page2"))
    await collection_repo.save(_collection(name="other", page_id="page1"))

    matches = await collection_repo.find_all_by_name_and_page_ids_and_view_mode(
        "utils", ["page1"], False
    )

    assert len(matches) == 1
    assert matches[0].unpublished_collection.page_id == "page1"
    assert await collection_repo.find_all_by_name_and_page_ids_and_view_mode(
        "utils", ["page1"], True
    ) == []


@pytest.mark.asyncio
async def test_deleted_drafts_are_hidden_in_edit_mode(collection_repo):
    deleted = _collection(name="gone", deleted_at=datetime.now(timezone.utc))
    deleted.published_collection = ActionCollectionDTO(name="gone", page_id="page1")
    await collection_repo.save(deleted)
    await collection_repo.save(_collection(name="live"))

    drafts = await collection_repo.find_by_page_id("page1", False)
    published = await collection_repo.find_by_page_id("page1", True)

    assert [c.unpublished_collection.name for c in drafts] == ["live"]
    assert [c.published_collection.name for c in published] == ["gone"]
    assert await collection_repo.find_all_by_name_and_page_ids_and_view_mode(
        "gone", ["page1"], False
    ) == []


@pytest.mark.asyncio
async def test_application_queries(collection_repo):
    await collection_repo.save(_collection(name="one"))
    await collection_repo.save(_collection(name="two", deleted_at=datetime.now(timezone.utc)))
    await collection_repo.save(_collection(name="three", application_id="app2"))

    visible = await collection_repo.find_by_application_id("app1", False)
    everything = await collection_repo.list_by_application_id("app1")

    assert {c.unpublished_collection.name for c in visible} == {"one"}
    assert {c.unpublished_collection.name for c in everything} == {"one", "two"}


@pytest.mark.asyncio
async def test_delete(collection_repo):
    saved = await collection_repo.save(_collection())

    await collection_repo.delete(saved)

    assert await collection_repo.get_by_id(saved.id) is None

"""Unit tests for the action collections router."""

from unittest.mock import AsyncMock

import pytest

from actionbase.core.exceptions import NoResourceFoundError
from actionbase.domain.entities import ActionCollectionDTO, ActionDTO
from actionbase.domain.services import ActionCollectionService
from actionbase.infrastructure.api.routes.action_collections_router import (
    create_action_collection,
    delete_action_collection,
    get_action_collection,
    list_action_collections,
    update_action_collection,
)
from actionbase.infrastructure.api.schemas import (
    ActionCollectionCreate,
    ActionCollectionUpdate,
)


@pytest.fixture
def mock_service():
    """Create a mock ActionCollectionService."""
    return AsyncMock(spec=ActionCollectionService)


@pytest.fixture
def mock_session():
    """Create a mock AsyncSession."""
    session = AsyncMock()
    session.commit = AsyncMock()
    return session


@pytest.fixture
def draft():
    return ActionCollectionDTO(
        id="c1",
        name="utils",
        page_id="page1",
        application_id="app1",
        organization_id="org1",
        plugin_id="js-plugin",
        action_ids={"a2", "a1"},
        actions=[ActionDTO(id="a1", name="run", fully_qualified_name="utils.run")],
    )


@pytest.mark.asyncio
async def test_create_action_collection(mock_service, mock_session, draft):
    mock_service.create_collection.return_value = draft
    payload = ActionCollectionCreate(
        name="utils",
        page_id="page1",
        application_id="app1",
        organization_id="org1",
        plugin_id="js-plugin",
        actions=[{"name": "run", "body": "() => 1"}],
    )

    result = await create_action_collection(payload, mock_service, mock_session)

    assert result.id == "c1"
    assert result.action_ids == ["a1", "a2"]
    assert result.actions[0].fully_qualified_name == "utils.run"
    sent = mock_service.create_collection.await_args.args[0]
    assert sent.id is None
    assert [action.name for action in sent.actions] == ["run"]
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_list_action_collections(mock_service, draft):
    mock_service.get_populated_action_collections_by_view_mode.return_value = [draft]

    result = await list_action_collections(mock_service, page_id="page1", view_mode=True)

    assert [collection.name for collection in result] == ["utils"]
    mock_service.get_populated_action_collections_by_view_mode.assert_awaited_once_with(
        True, page_id="page1", application_id=None
    )


@pytest.mark.asyncio
async def test_get_action_collection_not_found(mock_service):
    mock_service.find_by_id.side_effect = NoResourceFoundError("action_collection", "c9")

    with pytest.raises(NoResourceFoundError):
        await get_action_collection("c9", mock_service)


@pytest.mark.asyncio
async def test_update_action_collection_uses_path_id(mock_service, mock_session, draft):
    mock_service.update_unpublished_action_collection.return_value = draft
    payload = ActionCollectionUpdate(body="export default {}", action_ids=["a1"], archived_action_ids=["a2"])

    result = await update_action_collection("c1", payload, mock_service, mock_session)

    assert result.id == "c1"
    collection_id, sent = mock_service.update_unpublished_action_collection.await_args.args
    assert collection_id == "c1"
    assert sent.action_ids == {"a1"}
    assert sent.archived_action_ids == {"a2"}
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_failure_does_not_commit(mock_service, mock_session):
    mock_service.update_unpublished_action_collection.side_effect = NoResourceFoundError(
        "action_collection", "c9"
    )

    with pytest.raises(NoResourceFoundError):
        await update_action_collection("c9", ActionCollectionUpdate(), mock_service, mock_session)

    mock_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_action_collection(mock_service, mock_session, draft):
    mock_service.delete_unpublished_action_collection.return_value = draft.copy(actions=[])

    result = await delete_action_collection("c1", mock_service, mock_session)

    assert result.actions == []
    mock_service.delete_unpublished_action_collection.assert_awaited_once_with("c1")
    mock_session.commit.assert_awaited_once()

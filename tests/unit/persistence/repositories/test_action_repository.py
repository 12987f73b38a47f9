"""Tests for ActionRepository and PageRepository."""

import pytest

from actionbase.domain.entities import ActionDTO, NewAction, NewPage, PageDTO
from actionbase.infrastructure.persistence.repositories import ActionRepository, PageRepository


@pytest.fixture
def action_repo(db_session):
    return ActionRepository(db_session)


@pytest.fixture
def page_repo(db_session):
    return PageRepository(db_session)


def _action(name="run", page_id="page1", application_id="app1") -> NewAction:
    return NewAction(
        application_id=application_id,
        organization_id="org1",
        plugin_id="js-plugin",
        unpublished_action=ActionDTO(
            name=name,
            page_id=page_id,
            application_id=application_id,
            action_configuration={"timeoutInMillisecond": 10000},
        ),
    )


@pytest.mark.asyncio
async def test_action_save_and_get(action_repo):
    saved = await action_repo.save(_action())
    loaded = await action_repo.get_by_id(saved.id)

    assert loaded.id == saved.id
    assert loaded.plugin_id == "js-plugin"
    assert loaded.unpublished_action.name == "run"
    assert loaded.unpublished_action.action_configuration == {"timeoutInMillisecond": 10000}
    assert loaded.published_action is None


@pytest.mark.asyncio
async def test_action_find_by_page_id_per_view_mode(action_repo):
    published = _action(name="live")
    published.published_action = published.unpublished_action.copy()
    await action_repo.save(published)
    await action_repo.save(_action(name="draftOnly"))
    await action_repo.save(_action(name="elsewhere", page_id="page2"))

    drafts = await action_repo.find_by_page_id("page1", False)
    views = await action_repo.find_by_page_id("page1", True)

    assert {a.unpublished_action.name for a in drafts} == {"live", "draftOnly"}
    assert [a.published_action.name for a in views] == ["live"]


@pytest.mark.asyncio
async def test_action_list_by_application_and_delete(action_repo):
    first = await action_repo.save(_action(name="one"))
    await action_repo.save(_action(name="two", application_id="app2"))

    assert [a.id for a in await action_repo.list_by_application_id("app1")] == [first.id]

    await action_repo.delete(first)

    assert await action_repo.get_by_id(first.id) is None
    assert await action_repo.list_by_application_id("app1") == []


@pytest.mark.asyncio
async def test_page_round_trip(page_repo):
    page = NewPage(
        application_id="app1",
        unpublished_page=PageDTO(name="Home", widget_names={"Table1", "Button1"}),
    )

    saved = await page_repo.save(page)
    loaded = await page_repo.get_by_id(saved.id)

    assert loaded.application_id == "app1"
    assert loaded.unpublished_page.widget_names == {"Table1", "Button1"}
    assert loaded.published_page is None
    assert loaded.state(False).id == saved.id

    await page_repo.delete(loaded)

    assert await page_repo.get_by_id(saved.id) is None

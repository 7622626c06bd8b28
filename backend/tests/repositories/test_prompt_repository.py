from __future__ import annotations

from datetime import datetime, timedelta, timezone

from prompt_cloud.repositories.folder_repository import FolderRepository
from prompt_cloud.repositories.prompt_repository import (
    ListPromptsFilter,
    PromptRepository,
    SortField,
    SortOrder,
)


def _seed(session):
    folders = FolderRepository(session)
    prompts = PromptRepository(session)
    work = folders.create(name="Work", emoji=None)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    items = [
        prompts.create(title="beta", content="Write a FOO summary", emoji=None, folder_id=work.id),
        prompts.create(title="alpha", content="plain text", emoji=None, folder_id=None),
        prompts.create(title="Foobar", content="nothing here", emoji="🔥", folder_id=work.id),
        prompts.create(title="gamma", content="100% sure", emoji=None, folder_id=None),
    ]
    for offset, prompt in enumerate(items):
        prompt.created_at = base + timedelta(days=offset)
    session.flush()
    return work, items


def test_filter_from_params_defaults_and_normalization() -> None:
    empty = ListPromptsFilter.from_params()
    assert empty == ListPromptsFilter()
    assert empty.sort_by is SortField.CREATED_AT
    assert empty.sort_order is SortOrder.DESC

    parsed = ListPromptsFilter.from_params(
        folder_id="",
        search="   ",
        sort_by="updatedAt",
        sort_order="sideways",
    )
    assert parsed.folder_id is None
    assert parsed.search is None
    assert parsed.sort_by is SortField.CREATED_AT
    assert parsed.sort_order is SortOrder.DESC

    title_asc = ListPromptsFilter.from_params(search="  foo ", sort_by="title", sort_order="ASC")
    assert title_asc.search == "foo"
    assert title_asc.sort_by is SortField.TITLE
    assert title_asc.sort_order is SortOrder.ASC


def test_list_defaults_to_newest_first(session) -> None:
    _, items = _seed(session)
    result = PromptRepository(session).list(ListPromptsFilter())
    assert [p.id for p in result] == [p.id for p in reversed(items)]


def test_list_filters_by_folder_and_embeds_it(session) -> None:
    work, _ = _seed(session)
    result = PromptRepository(session).list(ListPromptsFilter(folder_id=work.id))
    assert {p.title for p in result} == {"beta", "Foobar"}
    assert all(p.folder is not None and p.folder.name == "Work" for p in result)


def test_search_matches_title_or_content_case_insensitively(session) -> None:
    _seed(session)
    result = PromptRepository(session).list(ListPromptsFilter.from_params(search="foo"))
    assert {p.title for p in result} == {"beta", "Foobar"}


def test_search_and_folder_combine(session) -> None:
    work, _ = _seed(session)
    repo = PromptRepository(session)
    assert repo.list(ListPromptsFilter(folder_id=work.id, search="summary"))[0].title == "beta"
    assert repo.list(ListPromptsFilter(folder_id=work.id, search="plain")) == []


def test_search_treats_wildcards_literally(session) -> None:
    _seed(session)
    repo = PromptRepository(session)
    assert [p.title for p in repo.list(ListPromptsFilter(search="%"))] == ["gamma"]
    assert repo.list(ListPromptsFilter(search="_")) == []


def test_sort_by_title_ascending_and_descending(session) -> None:
    _seed(session)
    repo = PromptRepository(session)
    # SQLite compares bytes: uppercase sorts before lowercase
    asc = repo.list(ListPromptsFilter(sort_by=SortField.TITLE, sort_order=SortOrder.ASC))
    assert [p.title for p in asc] == ["Foobar", "alpha", "beta", "gamma"]
    desc = repo.list(ListPromptsFilter(sort_by=SortField.TITLE, sort_order=SortOrder.DESC))
    assert [p.title for p in desc] == ["gamma", "beta", "alpha", "Foobar"]


def test_sort_order_applies_to_created_at(session) -> None:
    _, items = _seed(session)
    filters = ListPromptsFilter.from_params(sort_by="createdAt", sort_order="asc")
    result = PromptRepository(session).list(filters)
    assert [p.id for p in result] == [p.id for p in items]


def test_sort_order_ignored_for_unknown_sort_field(session) -> None:
    _, items = _seed(session)
    filters = ListPromptsFilter.from_params(sort_by="updatedAt", sort_order="asc")
    assert (filters.sort_by, filters.sort_order) == (SortField.CREATED_AT, SortOrder.DESC)
    result = PromptRepository(session).list(filters)
    assert [p.id for p in result] == [p.id for p in reversed(items)]


def test_sort_order_ignored_without_sort_field(session) -> None:
    _, items = _seed(session)
    filters = ListPromptsFilter.from_params(sort_order="asc")
    assert filters.sort_order is SortOrder.DESC
    result = PromptRepository(session).list(filters)
    assert [p.id for p in result] == [p.id for p in reversed(items)]


def test_list_returns_empty_when_nothing_matches(session) -> None:
    _seed(session)
    assert PromptRepository(session).list(ListPromptsFilter(search="does-not-exist")) == []

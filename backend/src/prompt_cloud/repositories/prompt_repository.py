from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..models.folder import utcnow
from ..models.prompt import Prompt
from ..utils.updates import FieldUpdate, SetTo, Clear
from .store_errors import translate_store_errors


log = logging.getLogger("prompt_cloud.repositories.prompt")

_LIKE_ESCAPE = "\\"


class SortField(str, Enum):
    TITLE = "title"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ListPromptsFilter:
    """Closed set of criteria accepted by ``PromptRepository.list``."""

    folder_id: str | None = None
    search: str | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_params(
        cls,
        *,
        folder_id: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> "ListPromptsFilter":
        """Normalize raw query-string values.

        ``sort_order`` is only honoured together with a recognised ``sort_by``;
        anything else lists newest first.
        """
        term = search.strip() if isinstance(search, str) else ""
        field, order = SortField.CREATED_AT, SortOrder.DESC
        if sort_by in {f.value for f in SortField}:
            field = SortField(sort_by)
            try:
                order = SortOrder(sort_order.strip().lower()) if sort_order else SortOrder.DESC
            except ValueError:
                order = SortOrder.DESC
        return cls(
            folder_id=folder_id or None,
            search=term or None,
            sort_by=field,
            sort_order=order,
        )


def _contains_pattern(term: str) -> str:
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class PromptRepository:
    def __init__(self, session: Session):
        self.session = session

    def list(self, filters: ListPromptsFilter) -> list[Prompt]:
        query = self.session.query(Prompt).options(joinedload(Prompt.folder))
        if filters.folder_id is not None:
            query = query.filter(Prompt.folder_id == filters.folder_id)
        if filters.search:
            pattern = _contains_pattern(filters.search)
            query = query.filter(
                or_(
                    Prompt.title.ilike(pattern, escape=_LIKE_ESCAPE),
                    Prompt.content.ilike(pattern, escape=_LIKE_ESCAPE),
                )
            )
        column = Prompt.title if filters.sort_by is SortField.TITLE else Prompt.created_at
        ordering = column.asc() if filters.sort_order is SortOrder.ASC else column.desc()
        with translate_store_errors(self.session, "fetch prompts"):
            items = query.order_by(ordering).all()
        log.debug(
            "Loaded %d prompts (folder_id=%s, search=%r, sort=%s %s)",
            len(items),
            filters.folder_id,
            filters.search,
            filters.sort_by.value,
            filters.sort_order.value,
        )
        return items

    def get_by_id(self, prompt_id: str) -> Prompt | None:
        with translate_store_errors(self.session, "fetch prompt"):
            return (
                self.session.query(Prompt)
                .options(joinedload(Prompt.folder))
                .filter(Prompt.id == prompt_id)
                .one_or_none()
            )

    def create(
        self,
        *,
        title: str,
        content: str,
        emoji: str | None,
        folder_id: str | None,
    ) -> Prompt:
        prompt = Prompt(title=title, content=content, emoji=emoji, folder_id=folder_id)
        with translate_store_errors(self.session, "create prompt"):
            self.session.add(prompt)
            self.session.flush()
        log.info("Prompt created (id=%s, folder_id=%s)", prompt.id, folder_id)
        return prompt

    def update(
        self,
        prompt: Prompt,
        *,
        title: FieldUpdate[str],
        content: FieldUpdate[str],
        emoji: FieldUpdate[str],
        folder_id: FieldUpdate[str],
    ) -> Prompt:
        changed: list[str] = []
        if isinstance(title, SetTo):
            prompt.title = title.value
            changed.append("title")
        if isinstance(content, SetTo):
            prompt.content = content.value
            changed.append("content")
        if isinstance(emoji, SetTo):
            prompt.emoji = emoji.value
            changed.append("emoji")
        elif isinstance(emoji, Clear):
            prompt.emoji = None
            changed.append("emoji")
        if isinstance(folder_id, SetTo):
            prompt.folder_id = folder_id.value
            changed.append("folder_id")
        elif isinstance(folder_id, Clear):
            prompt.folder_id = None
            changed.append("folder_id")
        prompt.updated_at = utcnow()
        with translate_store_errors(self.session, "update prompt"):
            self.session.flush()
        if "folder_id" in changed:
            # The loaded relationship still points at the previous folder
            self.session.expire(prompt, ["folder"])
        log.info("Prompt updated (id=%s, fields=%s)", prompt.id, ",".join(changed))
        return prompt

    def delete(self, prompt: Prompt) -> None:
        prompt_id = prompt.id
        with translate_store_errors(self.session, "delete prompt"):
            self.session.delete(prompt)
            self.session.flush()
        log.info("Prompt deleted (id=%s)", prompt_id)

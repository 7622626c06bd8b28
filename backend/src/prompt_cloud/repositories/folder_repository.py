from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from ..models.folder import Folder, utcnow
from ..models.prompt import Prompt
from ..utils.updates import FieldUpdate, SetTo, Clear
from .store_errors import translate_store_errors


log = logging.getLogger("prompt_cloud.repositories.folder")


class FolderRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_with_counts(self) -> list[tuple[Folder, int]]:
        """Return every folder with its prompt count, newest first."""
        counts = (
            select(Prompt.folder_id, func.count(Prompt.id).label("prompt_count"))
            .where(Prompt.folder_id.is_not(None))
            .group_by(Prompt.folder_id)
            .subquery()
        )
        with translate_store_errors(self.session, "fetch folders"):
            rows = (
                self.session.query(Folder, func.coalesce(counts.c.prompt_count, 0))
                .outerjoin(counts, counts.c.folder_id == Folder.id)
                .order_by(Folder.created_at.desc())
                .all()
            )
        log.debug("Loaded %d folders", len(rows))
        return [(folder, int(count)) for folder, count in rows]

    def get_by_id(self, folder_id: str, *, with_prompts: bool = False) -> Folder | None:
        query = self.session.query(Folder)
        if with_prompts:
            query = query.options(selectinload(Folder.prompts))
        with translate_store_errors(self.session, "fetch folder"):
            return query.filter(Folder.id == folder_id).one_or_none()

    def create(self, *, name: str, emoji: str | None) -> Folder:
        folder = Folder(name=name, emoji=emoji)
        with translate_store_errors(self.session, "create folder"):
            self.session.add(folder)
            self.session.flush()
        log.info("Folder created (id=%s, name=%s)", folder.id, name)
        return folder

    def update(
        self,
        folder: Folder,
        *,
        name: FieldUpdate[str],
        emoji: FieldUpdate[str],
    ) -> Folder:
        changed: list[str] = []
        if isinstance(name, SetTo):
            folder.name = name.value
            changed.append("name")
        if isinstance(emoji, SetTo):
            folder.emoji = emoji.value
            changed.append("emoji")
        elif isinstance(emoji, Clear):
            folder.emoji = None
            changed.append("emoji")
        folder.updated_at = utcnow()
        with translate_store_errors(self.session, "update folder"):
            self.session.flush()
        log.info("Folder updated (id=%s, fields=%s)", folder.id, ",".join(changed))
        return folder

    def delete(self, folder: Folder) -> None:
        folder_id = folder.id
        with translate_store_errors(self.session, "delete folder"):
            self.session.delete(folder)
            self.session.flush()
        log.info("Folder deleted (id=%s); owned prompts removed by cascade", folder_id)

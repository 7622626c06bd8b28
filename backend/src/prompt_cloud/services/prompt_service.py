from __future__ import annotations

import logging

from ..core.errors import NotFoundError, ValidationError
from ..models.prompt import Prompt
from ..repositories.prompt_repository import ListPromptsFilter, PromptRepository
from ..utils.updates import UNCHANGED, Clear, FieldUpdate, SetTo, is_unchanged
from ..utils.text import clean_optional, is_blank


log = logging.getLogger("prompt_cloud.services.prompt")


def _rejects_required(update: FieldUpdate[str]) -> bool:
    """Title and content can be replaced but never cleared."""
    if isinstance(update, Clear):
        return True
    return isinstance(update, SetTo) and is_blank(update.value)


class PromptService:
    def __init__(self, repo: PromptRepository):
        self.repo = repo

    def list_prompts(self, filters: ListPromptsFilter | None = None) -> list[Prompt]:
        return self.repo.list(filters or ListPromptsFilter())

    def create_prompt(
        self,
        *,
        title: str | None,
        content: str | None,
        emoji: str | None = None,
        folder_id: str | None = None,
    ) -> Prompt:
        if is_blank(title) or is_blank(content):
            raise ValidationError("Prompt title and content are required")
        return self.repo.create(
            title=title,  # type: ignore[arg-type]
            content=content,  # type: ignore[arg-type]
            emoji=clean_optional(emoji),
            folder_id=folder_id or None,
        )

    def get_prompt(self, prompt_id: str) -> Prompt:
        prompt = self.repo.get_by_id(prompt_id)
        if prompt is None:
            raise NotFoundError("Prompt not found")
        return prompt

    def update_prompt(
        self,
        prompt_id: str,
        *,
        title: FieldUpdate[str] = UNCHANGED,
        content: FieldUpdate[str] = UNCHANGED,
        emoji: FieldUpdate[str] = UNCHANGED,
        folder_id: FieldUpdate[str] = UNCHANGED,
    ) -> Prompt:
        if all(is_unchanged(update) for update in (title, content, emoji, folder_id)):
            raise ValidationError("No update fields provided (title, content, emoji, or folderId)")
        if _rejects_required(title) or _rejects_required(content):
            raise ValidationError("Prompt title and content are required")
        if isinstance(emoji, SetTo) and clean_optional(emoji.value) is None:
            emoji = Clear()
        prompt = self.repo.get_by_id(prompt_id)
        if prompt is None:
            raise NotFoundError("Prompt not found")
        if isinstance(folder_id, Clear) and prompt.folder_id is not None:
            log.debug("Detaching prompt %s from folder %s", prompt_id, prompt.folder_id)
        return self.repo.update(
            prompt,
            title=title,
            content=content,
            emoji=emoji,
            folder_id=folder_id,
        )

    def delete_prompt(self, prompt_id: str) -> None:
        prompt = self.repo.get_by_id(prompt_id)
        if prompt is None:
            raise NotFoundError("Prompt not found")
        self.repo.delete(prompt)

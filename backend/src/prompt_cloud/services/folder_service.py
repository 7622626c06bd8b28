from __future__ import annotations

from ..core.errors import NotFoundError, ValidationError
from ..models.folder import Folder
from ..repositories.folder_repository import FolderRepository
from ..utils.updates import UNCHANGED, Clear, FieldUpdate, SetTo, is_unchanged
from ..utils.text import clean_optional, is_blank


class FolderService:
    def __init__(self, repo: FolderRepository):
        self.repo = repo

    def list_folders(self) -> list[tuple[Folder, int]]:
        return self.repo.list_with_counts()

    def create_folder(self, *, name: str | None, emoji: str | None = None) -> Folder:
        if is_blank(name):
            raise ValidationError("Folder name is required")
        return self.repo.create(name=name, emoji=clean_optional(emoji))  # type: ignore[arg-type]

    def get_folder(self, folder_id: str) -> Folder:
        folder = self.repo.get_by_id(folder_id, with_prompts=True)
        if folder is None:
            raise NotFoundError("Folder not found")
        return folder

    def update_folder(
        self,
        folder_id: str,
        *,
        name: FieldUpdate[str] = UNCHANGED,
        emoji: FieldUpdate[str] = UNCHANGED,
    ) -> Folder:
        if is_unchanged(name) and is_unchanged(emoji):
            raise ValidationError("No update fields provided (name or emoji)")
        if isinstance(name, Clear) or (isinstance(name, SetTo) and is_blank(name.value)):
            raise ValidationError("Folder name is required")
        if isinstance(emoji, SetTo) and clean_optional(emoji.value) is None:
            emoji = Clear()
        folder = self.repo.get_by_id(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")
        return self.repo.update(folder, name=name, emoji=emoji)

    def delete_folder(self, folder_id: str) -> None:
        folder = self.repo.get_by_id(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")
        self.repo.delete(folder)

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from ..models.folder import Folder
    from ..models.prompt import Prompt


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FolderCreateRequest(ApiModel):
    # Required-ness is checked by the service so the API answers 400, not 422.
    name: str | None = None
    emoji: str | None = None


class FolderUpdateRequest(ApiModel):
    name: str | None = None
    emoji: str | None = None


class FolderResponse(ApiModel):
    id: str
    name: str
    emoji: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, folder: "Folder") -> "FolderResponse":
        return cls(
            id=folder.id,
            name=folder.name,
            emoji=folder.emoji,
            created_at=folder.created_at,
            updated_at=folder.updated_at,
        )


class FolderSummaryResponse(FolderResponse):
    prompt_count: int = 0

    @classmethod
    def from_model(cls, folder: "Folder", *, prompt_count: int = 0) -> "FolderSummaryResponse":  # type: ignore[override]
        return cls(
            id=folder.id,
            name=folder.name,
            emoji=folder.emoji,
            created_at=folder.created_at,
            updated_at=folder.updated_at,
            prompt_count=prompt_count,
        )


class PromptCreateRequest(ApiModel):
    title: str | None = None
    content: str | None = None
    emoji: str | None = None
    folder_id: str | None = None


class PromptUpdateRequest(ApiModel):
    """Every field is optional; ``folderId: null`` detaches the prompt."""

    title: str | None = None
    content: str | None = None
    emoji: str | None = None
    folder_id: str | None = None


class PromptItem(ApiModel):
    id: str
    title: str
    content: str
    emoji: str | None = None
    folder_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, prompt: "Prompt") -> "PromptItem":
        return cls(
            id=prompt.id,
            title=prompt.title,
            content=prompt.content,
            emoji=prompt.emoji,
            folder_id=prompt.folder_id,
            created_at=prompt.created_at,
            updated_at=prompt.updated_at,
        )


class PromptResponse(PromptItem):
    folder: FolderResponse | None = None

    @classmethod
    def from_model(cls, prompt: "Prompt") -> "PromptResponse":
        return cls(
            id=prompt.id,
            title=prompt.title,
            content=prompt.content,
            emoji=prompt.emoji,
            folder_id=prompt.folder_id,
            created_at=prompt.created_at,
            updated_at=prompt.updated_at,
            folder=FolderResponse.from_model(prompt.folder) if prompt.folder is not None else None,
        )


class FolderDetailResponse(FolderResponse):
    prompts: list[PromptItem] = Field(default_factory=list)

    @classmethod
    def from_model(cls, folder: "Folder") -> "FolderDetailResponse":
        return cls(
            id=folder.id,
            name=folder.name,
            emoji=folder.emoji,
            created_at=folder.created_at,
            updated_at=folder.updated_at,
            prompts=[PromptItem.from_model(prompt) for prompt in folder.prompts],
        )

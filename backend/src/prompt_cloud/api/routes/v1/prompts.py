from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ....core.database import get_session
from ....repositories.prompt_repository import ListPromptsFilter, PromptRepository
from ....schemas.library import PromptCreateRequest, PromptResponse, PromptUpdateRequest
from ....services.prompt_service import PromptService
from ....utils.updates import field_update


router = APIRouter(prefix="/prompts")


def _service(session: Session) -> PromptService:
    return PromptService(PromptRepository(session))


@router.get("", response_model=list[PromptResponse])
def list_prompts(  # type: ignore[valid-type]
    session: Session = Depends(get_session),
    folder_id: str | None = Query(None, alias="folderId"),
    search: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
) -> list[PromptResponse]:
    filters = ListPromptsFilter.from_params(
        folder_id=folder_id,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items = _service(session).list_prompts(filters)
    return [PromptResponse.from_model(item) for item in items]


@router.post("", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
def create_prompt(  # type: ignore[valid-type]
    payload: PromptCreateRequest,
    session: Session = Depends(get_session),
) -> PromptResponse:
    prompt = _service(session).create_prompt(
        title=payload.title,
        content=payload.content,
        emoji=payload.emoji,
        folder_id=payload.folder_id,
    )
    session.commit()
    session.refresh(prompt)
    return PromptResponse.from_model(prompt)


@router.get("/{prompt_id}", response_model=PromptResponse)
def get_prompt(  # type: ignore[valid-type]
    prompt_id: str,
    session: Session = Depends(get_session),
) -> PromptResponse:
    return PromptResponse.from_model(_service(session).get_prompt(prompt_id))


@router.put("/{prompt_id}", response_model=PromptResponse)
def update_prompt(  # type: ignore[valid-type]
    prompt_id: str,
    payload: PromptUpdateRequest,
    session: Session = Depends(get_session),
) -> PromptResponse:
    prompt = _service(session).update_prompt(
        prompt_id,
        title=field_update(payload, "title"),
        content=field_update(payload, "content"),
        emoji=field_update(payload, "emoji"),
        folder_id=field_update(payload, "folder_id"),
    )
    session.commit()
    session.refresh(prompt)
    return PromptResponse.from_model(prompt)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_prompt(  # type: ignore[valid-type]
    prompt_id: str,
    session: Session = Depends(get_session),
) -> Response:
    _service(session).delete_prompt(prompt_id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ....core.database import get_session
from ....repositories.folder_repository import FolderRepository
from ....schemas.library import (
    FolderCreateRequest,
    FolderDetailResponse,
    FolderResponse,
    FolderSummaryResponse,
    FolderUpdateRequest,
)
from ....services.folder_service import FolderService
from ....utils.updates import field_update


router = APIRouter(prefix="/folders")


def _service(session: Session) -> FolderService:
    return FolderService(FolderRepository(session))


@router.get("", response_model=list[FolderSummaryResponse])
def list_folders(  # type: ignore[valid-type]
    session: Session = Depends(get_session),
) -> list[FolderSummaryResponse]:
    items = _service(session).list_folders()
    return [FolderSummaryResponse.from_model(folder, prompt_count=count) for folder, count in items]


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(  # type: ignore[valid-type]
    payload: FolderCreateRequest,
    session: Session = Depends(get_session),
) -> FolderResponse:
    folder = _service(session).create_folder(name=payload.name, emoji=payload.emoji)
    session.commit()
    session.refresh(folder)
    return FolderResponse.from_model(folder)


@router.get("/{folder_id}", response_model=FolderDetailResponse)
def get_folder(  # type: ignore[valid-type]
    folder_id: str,
    session: Session = Depends(get_session),
) -> FolderDetailResponse:
    folder = _service(session).get_folder(folder_id)
    return FolderDetailResponse.from_model(folder)


@router.put("/{folder_id}", response_model=FolderResponse)
def update_folder(  # type: ignore[valid-type]
    folder_id: str,
    payload: FolderUpdateRequest,
    session: Session = Depends(get_session),
) -> FolderResponse:
    folder = _service(session).update_folder(
        folder_id,
        name=field_update(payload, "name"),
        emoji=field_update(payload, "emoji"),
    )
    session.commit()
    session.refresh(folder)
    return FolderResponse.from_model(folder)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_folder(  # type: ignore[valid-type]
    folder_id: str,
    session: Session = Depends(get_session),
) -> Response:
    _service(session).delete_folder(folder_id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

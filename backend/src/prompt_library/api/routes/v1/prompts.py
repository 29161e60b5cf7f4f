from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ....core.database import get_session
from ....repositories.prompt_repository import PromptRepository
from ....schemas.prompts import PromptCreateRequest, PromptItem, PromptUpdateRequest
from ....services.prompt_service import PromptNotFoundError, PromptService


router = APIRouter(prefix="/prompts")


def _service(session: Session) -> PromptService:
    return PromptService(PromptRepository(session))


@router.get("", response_model=list[PromptItem])
def list_prompts(  # type: ignore[valid-type]
    q: str | None = Query(None, description="Case-insensitive text filter"),
    session: Session = Depends(get_session),
) -> list[PromptItem]:
    prompts = _service(session).list_prompts(query=q)
    return [PromptItem.from_model(item) for item in prompts]


@router.get("/{prompt_id}", response_model=PromptItem)
def get_prompt(  # type: ignore[valid-type]
    prompt_id: int,
    session: Session = Depends(get_session),
) -> PromptItem:
    try:
        prompt = _service(session).get_prompt(prompt_id)
    except PromptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PromptItem.from_model(prompt)


@router.post("", response_model=PromptItem, status_code=status.HTTP_201_CREATED)
def create_prompt(  # type: ignore[valid-type]
    payload: PromptCreateRequest,
    session: Session = Depends(get_session),
) -> PromptItem:
    try:
        prompt = _service(session).create_prompt(
            name=payload.name,
            description=payload.description,
            content=payload.content,
        )
    except ValueError as exc:
        session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    session.commit()
    session.refresh(prompt)
    return PromptItem.from_model(prompt)


@router.put("/{prompt_id}", response_model=PromptItem)
def update_prompt(  # type: ignore[valid-type]
    prompt_id: int,
    payload: PromptUpdateRequest,
    session: Session = Depends(get_session),
) -> PromptItem:
    try:
        prompt = _service(session).update_prompt(
            prompt_id,
            name=payload.name,
            description=payload.description,
            content=payload.content,
        )
    except PromptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    session.commit()
    session.refresh(prompt)
    return PromptItem.from_model(prompt)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prompt(  # type: ignore[valid-type]
    prompt_id: int,
    session: Session = Depends(get_session),
) -> Response:
    try:
        _service(session).delete_prompt(prompt_id)
    except PromptNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

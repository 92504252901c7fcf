# postboard/routers/post_router.py
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from postboard.dependencies.db import get_session_dep
from postboard.schemas.post_schema import ErrorBody, PostCreate, PostRead, PostUpdate
from postboard.services.post_service import NotFound, PostService, ValidationFailed

router = APIRouter(prefix="/posts", tags=["posts"])

NOT_FOUND = {404: {"model": ErrorBody}}
BAD_REQUEST = {400: {"model": ErrorBody}}


def get_post_service(request: Request, session: AsyncSession = Depends(get_session_dep)) -> PostService:
    return PostService(session, max_image_length=request.app.state.settings.max_image_length)


def _not_found(post_id: uuid.UUID) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Post with ID {post_id} not found")


def _invalid(result: ValidationFailed) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": "Validation failed", "errors": result.errors},
    )


@router.get("", response_model=List[PostRead])
async def list_posts(svc: PostService = Depends(get_post_service)):
    return await svc.list_all()


@router.get("/{post_id}", response_model=PostRead, responses=NOT_FOUND)
async def get_post(post_id: uuid.UUID, svc: PostService = Depends(get_post_service)):
    result = await svc.get_by_id(post_id)
    if isinstance(result, NotFound):
        raise _not_found(post_id)
    return result


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED, responses=BAD_REQUEST)
async def create_post(payload: PostCreate, request: Request, response: Response, svc: PostService = Depends(get_post_service)):
    result = await svc.create(payload)
    if isinstance(result, ValidationFailed):
        raise _invalid(result)
    response.headers["Location"] = str(request.url_for("get_post", post_id=str(result.id)))
    return result


@router.put("/{post_id}", response_model=PostRead, responses={**BAD_REQUEST, **NOT_FOUND})
async def update_post(post_id: uuid.UUID, payload: PostUpdate, svc: PostService = Depends(get_post_service)):
    result = await svc.update(post_id, payload)
    if isinstance(result, ValidationFailed):
        raise _invalid(result)
    if isinstance(result, NotFound):
        raise _not_found(post_id)
    return result


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses=NOT_FOUND)
async def delete_post(post_id: uuid.UUID, svc: PostService = Depends(get_post_service)):
    if not await svc.delete(post_id):
        raise _not_found(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

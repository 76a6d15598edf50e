"""
Tour API Routes
================

GET    /api/tours        - Public tours (no auth)
GET    /api/tours/my     - The caller's tours
POST   /api/tours        - Create a tour for the caller
PUT    /api/tours/{id}   - Update one of the caller's tours (partial)
DELETE /api/tours/{id}   - Delete one of the caller's tours

Field names on the wire are camelCase (isPublic, createdAt, ownerId).
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.tours.errors import NotFoundError
from src.tours.models import Tour

from ..dependencies import get_current_user, CurrentUser
from ..models.database import get_store

router = APIRouter()
logger = logging.getLogger(__name__)


# ============================================================
# MODELS
# ============================================================

class StepModel(BaseModel):
    id: Optional[Union[str, int]] = None
    text: str = ""
    image: str = ""


class AnalyticsModel(BaseModel):
    views: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)


class TourCreate(BaseModel):
    """Body for POST /api/tours"""
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    steps: List[StepModel] = []
    analytics: Optional[AnalyticsModel] = None
    isPublic: Optional[bool] = None


class TourUpdate(BaseModel):
    """Body for PUT /api/tours/{id}; omitted fields keep their stored value"""
    title: Optional[str] = Field(None, min_length=1)
    steps: Optional[List[StepModel]] = None
    analytics: Optional[AnalyticsModel] = None
    isPublic: Optional[bool] = None


class TourResponse(BaseModel):
    id: str
    title: str
    steps: List[StepModel]
    analytics: AnalyticsModel
    isPublic: bool
    createdAt: str
    ownerId: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


def _to_response(tour: Tour) -> TourResponse:
    return TourResponse(**tour.to_dict())


# ============================================================
# ENDPOINTS
# ============================================================

@router.get("", response_model=List[TourResponse])
async def list_public_tours(store=Depends(get_store)):
    """All public tours, from every owner."""
    return [_to_response(t) for t in store.list_public()]


@router.get("/my", response_model=List[TourResponse])
async def list_my_tours(user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    return [_to_response(t) for t in store.list(user.user_id)]


@router.post("", response_model=TourResponse)
async def create_tour(body: TourCreate, user: CurrentUser = Depends(get_current_user),
                      store=Depends(get_store)):
    if body.id is not None and store.get(body.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tour id already exists")

    tour = Tour.from_dict(body.model_dump(exclude_none=True))
    saved = store.create(tour, user.user_id)
    logger.info("Tour %s created via API (%d steps)", saved.id, len(saved.steps))
    return _to_response(saved)


@router.put("/{tour_id}", response_model=TourResponse)
async def update_tour(tour_id: str, body: TourUpdate,
                      user: CurrentUser = Depends(get_current_user), store=Depends(get_store)):
    existing = store.get(tour_id, user.user_id)
    if existing is None:
        raise NotFoundError(tour_id=tour_id)

    changes = body.model_dump(exclude_none=True)
    merged = existing.to_dict()
    merged.update(changes)
    tour = Tour.from_dict(merged)

    saved = store.update(tour, user.user_id)
    return _to_response(saved)


@router.delete("/{tour_id}", response_model=MessageResponse)
async def delete_tour(tour_id: str, user: CurrentUser = Depends(get_current_user),
                      store=Depends(get_store)):
    if not store.delete(tour_id, user.user_id):
        raise NotFoundError(tour_id=tour_id)
    return MessageResponse(message="Tour deleted")

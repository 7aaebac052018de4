"""Versioned JSON endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from gotophoto.server.dependencies import AppState, get_state
from gotophoto.server.models import LocationOut, PhotolocationOut

router = APIRouter(prefix="/v1")

NEXT_PAGE_HEADER = "X-Next-Page-Token"


@router.get("/locations/")
def list_locations(
    response: Response,
    page_token: Optional[int] = Query(default=None),
    state: AppState = Depends(get_state),
) -> List[LocationOut]:
    """One page of locations as a JSON array."""
    page = state.storage.list_locations(state.page_size, page_token)
    if page.cursor is not None:
        response.headers[NEXT_PAGE_HEADER] = str(page.cursor)
    return [LocationOut.model_validate(row) for row in page.locations]


@router.get("/locationphotos/{locid}")
def list_location_photos(
    locid: int,
    response: Response,
    page_token: Optional[int] = Query(default=None),
    state: AppState = Depends(get_state),
) -> List[PhotolocationOut]:
    """Photolocations recorded at one location; 404 when there are none."""
    page = state.storage.list_photolocations(locid, state.page_size, page_token)
    if not page.photolocations:
        raise HTTPException(status_code=404, detail="No photos at this location")
    if page.cursor is not None:
        response.headers[NEXT_PAGE_HEADER] = str(page.cursor)
    return [PhotolocationOut.model_validate(row) for row in page.photolocations]

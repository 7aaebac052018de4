"""HTML endpoint listing the photos taken at a location."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from gotophoto.server.dependencies import AppState, get_state

router = APIRouter()


@router.get("/photolocations/", response_class=HTMLResponse)
def list_photolocations(
    request: Request,
    location: int = Query(...),
    page_token: Optional[int] = Query(default=None),
    state: AppState = Depends(get_state),
):
    """Paginated list of photolocations at one location."""
    page = state.storage.list_photolocations(location, state.page_size, page_token)
    return state.templates.TemplateResponse(
        request,
        "photolocations.html",
        {
            "location_id": location,
            "photolocations": page.photolocations,
            "next_page_token": page.cursor,
        },
    )

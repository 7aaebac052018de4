"""HTML endpoints for browsing and editing locations."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from gotophoto.server.dependencies import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


async def _form_fields(request: Request) -> Dict[str, Any]:
    """Return submitted form fields, with empty values as None."""
    form = await request.form()
    return {name: (None if value == "" else value) for name, value in form.items()}


@router.get("/locations/", response_class=HTMLResponse)
def list_locations(
    request: Request,
    page_token: Optional[int] = Query(default=None),
    state: AppState = Depends(get_state),
):
    """Paginated list of locations."""
    logger.debug("Requesting location list (page_token=%s)", page_token)
    page = state.storage.list_locations(state.page_size, page_token)
    return state.templates.TemplateResponse(
        request,
        "list.html",
        {"locations": page.locations, "next_page_token": page.cursor},
    )


@router.get("/locations/add", response_class=HTMLResponse)
def add_form(request: Request, state: AppState = Depends(get_state)):
    return state.templates.TemplateResponse(
        request, "form.html", {"action": "Add", "location": {}}
    )


@router.post("/locations/add")
async def add_location(request: Request, state: AppState = Depends(get_state)):
    location = await _form_fields(request)
    location_id = await run_in_threadpool(state.storage.create_location, location)
    logger.info("Created location %s", location_id)
    return RedirectResponse(f"/locations/{location_id}", status_code=302)


@router.get("/locations/{id}", response_class=HTMLResponse)
def view_location(request: Request, id: int, state: AppState = Depends(get_state)):
    location = state.storage.read_location(id)
    if location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return state.templates.TemplateResponse(request, "view.html", {"location": location})


@router.get("/locations/{id}/edit", response_class=HTMLResponse)
def edit_form(request: Request, id: int, state: AppState = Depends(get_state)):
    location = state.storage.read_location(id)
    if location is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return state.templates.TemplateResponse(
        request, "form.html", {"action": "Edit", "location": location}
    )


@router.post("/locations/{id}/edit")
async def edit_location(request: Request, id: int, state: AppState = Depends(get_state)):
    location = await _form_fields(request)
    location["id"] = id
    if await run_in_threadpool(state.storage.read_location, id) is None:
        raise HTTPException(status_code=404, detail="Location not found")
    if await run_in_threadpool(state.storage.update_location, location):
        logger.info("Updated location %s", id)
        return RedirectResponse(f"/locations/{id}", status_code=302)
    return PlainTextResponse("Could not update location", status_code=500)


@router.post("/locations/{id}/delete")
def delete_location(id: int, state: AppState = Depends(get_state)):
    if state.storage.read_location(id) is None:
        raise HTTPException(status_code=404, detail="Location not found")
    state.storage.delete_location(id)
    logger.info("Deleted location %s", id)
    return RedirectResponse("/locations/", status_code=303)

# GET /event/*

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from event_pages.core.database import get_db
from event_pages.services.renderer import render_event_page, select_template
from event_pages.services.store import EventStore
import structlog

logger = structlog.get_logger()
router = APIRouter(prefix="/event", tags=["pages"])


async def render_page(event_id: str | None, db: AsyncSession):
    if not event_id:
        return PlainTextResponse(
            "Missing eventId (provide path parameter /event/{eventId} or ?eventId=...)",
            status_code=status.HTTP_400_BAD_REQUEST
        )

    try:
        record = await EventStore(db).get(event_id)
        if record is None:
            logger.info("event_not_found", event_id=event_id)
            return PlainTextResponse("Event not found", status_code=status.HTTP_404_NOT_FOUND)

        html = render_event_page(record)
        logger.info("event_page_rendered", event_id=event_id, template=select_template(record))
        return HTMLResponse(html)

    except Exception as e:
        logger.error("event_page_render_failed", event_id=event_id, error=str(e))
        return PlainTextResponse(
            f"Internal server error: {e}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@router.get("", response_class=HTMLResponse)
async def render_event_by_query(
        event_id: str | None = Query(default=None, alias="eventId"),
        db: AsyncSession = Depends(get_db)
):
    """Render an event page, id given as ?eventId=..."""
    return await render_page(event_id, db)


@router.get("/{event_id}", response_class=HTMLResponse)
async def render_event(event_id: str, db: AsyncSession = Depends(get_db)):
    """Render an event page"""
    return await render_page(event_id, db)

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from event_pages.core.database import get_db
from event_pages.core.storage import BlobStore, get_blob_store
from event_pages.schemas.event import EventCreatedResponse
from event_pages.services.assets import AssetPipeline
from event_pages.services.normalizer import (
    EventValidationError,
    normalize_event_payload,
    parse_event_body,
)
from event_pages.services.records import build_event_record, new_event_id, now_ms
from event_pages.services.store import EventConflictError, EventStore
import structlog

logger = structlog.get_logger()
router = APIRouter(prefix="/events", tags=["events"])


def get_asset_pipeline(blob_store: BlobStore = Depends(get_blob_store)) -> AssetPipeline:
    return AssetPipeline.from_settings(blob_store)


def error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    content = {"error": error}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


@router.post("", response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
        request: Request,
        db: AsyncSession = Depends(get_db),
        pipeline: AssetPipeline = Depends(get_asset_pipeline)
):
    """
    Create an event page from a JSON submission.

    - Field names from older clients (**title**, **date**, **partners**, ...) are accepted
    - Images are sent as base64 data URIs and uploaded best effort;
      an image that cannot be stored in time is left blank
    """
    try:
        body = parse_event_body(await request.body())
        event_input = normalize_event_payload(body)
    except EventValidationError as e:
        logger.warning("event_validation_failed", error=str(e))
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid event data", str(e))

    event_id = new_event_id()
    logger.info(
        "event_create_started",
        event_id=event_id,
        template=event_input.selected_template,
        assets=sorted(event_input.assets)
    )

    # Assets settle (or time out) before anything is written
    assets = await pipeline.process(event_id, event_input)
    record = build_event_record(event_id, event_input, assets, now_ms())

    try:
        await EventStore(db).create(record)
    except EventConflictError as e:
        return error_response(status.HTTP_409_CONFLICT, "Event already exists", str(e))
    except Exception as e:
        logger.error("event_create_failed", event_id=event_id, error=str(e))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to create event",
            str(e)
        )

    logger.info("event_created", event_id=event_id)
    return EventCreatedResponse(
        message="Event created successfully",
        eventId=event_id,
        eventUrl=f"/event/{event_id}",
        previewUrl=f"/preview/event-template-{event_input.selected_template}?eventId={event_id}",
    )


@router.get("")
async def get_events(
        event_id: str | None = Query(default=None, alias="eventId", description="Event id"),
        db: AsyncSession = Depends(get_db)
):
    """
    Return one event when **eventId** is given, otherwise every event.
    """
    store = EventStore(db)
    try:
        if event_id:
            logger.info("event_fetch", event_id=event_id)
            record = await store.get(event_id)
            if record is None:
                logger.info("event_not_found", event_id=event_id)
                return error_response(status.HTTP_404_NOT_FOUND, "Event not found")
            return record

        records = await store.list_all()
        logger.info("events_listed", count=len(records))
        return records

    except Exception as e:
        logger.error("event_fetch_failed", event_id=event_id, error=str(e))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from event_pages.models.event import EventRecord
import structlog

logger = structlog.get_logger()

# Record keys stored in their own columns; everything else goes to details
COLUMN_KEYS = {
    "eventId": "event_id",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "status": "status",
    "selectedTemplate": "selected_template",
    "eventName": "event_name",
    "eventDate": "event_date",
}


class EventConflictError(Exception):
    """An event with this id already exists"""

    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} already exists")
        self.event_id = event_id


class EventStore:
    """Record store for event pages, keyed by event id"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record: dict) -> None:
        """
        Insert a new record; never overwrites.

        Raises:
            EventConflictError: a record with the same eventId exists
        """
        columns = {column: record[key] for key, column in COLUMN_KEYS.items()}
        details = {key: value for key, value in record.items() if key not in COLUMN_KEYS}

        stmt = insert(EventRecord).values(**columns, details=details)
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("event_id_conflict", event_id=record["eventId"])
            raise EventConflictError(record["eventId"])
        except Exception:
            await self.db.rollback()
            raise

        logger.info("event_stored", event_id=record["eventId"])

    async def get(self, event_id: str) -> dict | None:
        row = await self.db.get(EventRecord, event_id)
        if row is None:
            return None
        return row.to_dict()

    async def list_all(self) -> list[dict]:
        """All records, newest first"""
        result = await self.db.execute(
            select(EventRecord).order_by(EventRecord.created_at.desc())
        )
        return [row.to_dict() for row in result.scalars().all()]

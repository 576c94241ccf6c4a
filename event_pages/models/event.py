# SQLAlchemy models

from sqlalchemy import BigInteger, Column, Index, JSON, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class EventRecord(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True)
    created_at = Column(BigInteger, nullable=False, index=True)  # ms since epoch
    updated_at = Column(BigInteger, nullable=False)
    status = Column(String(32), nullable=False, default="active")
    selected_template = Column(String(8), nullable=False, default="1")
    event_name = Column(String, nullable=False)
    event_date = Column(String(10), nullable=False)

    # Everything else of the record (speakers, agenda, sponsors, asset URLs, ...)
    details = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index('idx_status_created', 'status', 'created_at'),
    )

    def to_dict(self) -> dict:
        """Flatten columns and details back into the camelCase record"""
        record = dict(self.details or {})
        record.update(
            eventId=self.event_id,
            createdAt=self.created_at,
            updatedAt=self.updated_at,
            status=self.status,
            selectedTemplate=self.selected_template,
            eventName=self.event_name,
            eventDate=self.event_date,
        )
        return record

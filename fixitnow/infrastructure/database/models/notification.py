"""
Notification SQLAlchemy model.
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Uuid

from .base import BaseModel


class NotificationModel(BaseModel):
    """Notification database model."""

    __tablename__ = "notifications"

    recipient_id = Column(Uuid, nullable=False, index=True)
    recipient_model = Column(String(20), nullable=False)
    type = Column(String(50), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    message = Column(String(500), nullable=False)
    related_job_id = Column(Uuid, nullable=True)
    priority = Column(String(10), nullable=False, default="medium")
    action_data = Column(JSON(none_as_null=True))
    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True))

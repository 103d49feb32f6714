"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text

from sistema_os.infrastructure.database import Base
from sistema_os.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    data = Column(JSON, nullable=True)


__all__ = ["NotificationModel"]

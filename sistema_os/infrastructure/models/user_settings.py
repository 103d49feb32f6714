"""SQLAlchemy model storing the settings document of each user."""

from sqlalchemy import Column, DateTime, JSON, String

from sistema_os.infrastructure.database import Base
from sistema_os.utils import now_in_app_naive_datetime


class UserSettingsModel(Base):
    """One JSON settings document per user."""

    __tablename__ = "user_settings"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    settings = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["UserSettingsModel"]

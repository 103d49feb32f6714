"""Pydantic models for the notification preferences of a user."""

from pydantic import BaseModel, ConfigDict


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_updates: bool
    deadline_reminders: bool
    system_announcements: bool
    email_notifications: bool


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; omitted flags keep their stored value."""

    model_config = ConfigDict(extra="forbid")

    order_updates: bool | None = None
    deadline_reminders: bool | None = None
    system_announcements: bool | None = None
    email_notifications: bool | None = None

    def changes(self) -> dict[str, bool]:
        return self.model_dump(exclude_none=True)


__all__ = ["NotificationPreferencesRead", "NotificationPreferencesUpdate"]

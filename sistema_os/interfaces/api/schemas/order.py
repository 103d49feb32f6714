"""Service order schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sistema_os.domain.entities import ORDER_STATUS_OPEN


class OrderCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    order_number: str = Field(..., min_length=1, max_length=30)
    client_id: str | None = None
    description: str = Field(default="", max_length=2000)
    status: str = ORDER_STATUS_OPEN
    expected_completion_date: datetime | None = None
    observations: str | None = None


class OrderStatusUpdate(BaseModel):
    status: str


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    client_id: str | None
    client_name: str | None
    description: str
    status: str
    open_date: datetime | None
    expected_completion_date: datetime | None
    completion_date: datetime | None
    observations: str | None


__all__ = ["OrderCreate", "OrderRead", "OrderStatusUpdate"]

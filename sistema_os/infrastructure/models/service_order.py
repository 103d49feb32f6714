"""SQLAlchemy models for clients and their service orders."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from sistema_os.infrastructure.database import Base
from sistema_os.utils import now_in_app_naive_datetime


class ClientModel(Base):
    """Database representation for clients."""

    __tablename__ = "client"

    id = Column(String(36), primary_key=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=True)
    phone = Column(String(40), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class ServiceOrderModel(Base):
    """Database representation for service orders."""

    __tablename__ = "service_order"

    id = Column(String(36), primary_key=True)
    order_number = Column(String(30), nullable=False, unique=True, index=True)
    client_id = Column(String(36), ForeignKey("client.id"), nullable=True, index=True)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, index=True)
    open_date = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    expected_completion_date = Column(DateTime(), nullable=True)
    completion_date = Column(DateTime(), nullable=True)
    observations = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    client = relationship("ClientModel", lazy="joined")


__all__ = ["ClientModel", "ServiceOrderModel"]

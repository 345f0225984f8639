"""Service request submission models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlalchemy import DateTime, Text, func
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceRequestCreate(SQLModel):
    name: str = Field(max_length=255)
    contact_number: str = Field(max_length=50)
    service: str = Field(max_length=100)
    description: str = Field(sa_type=Text)


class ServiceRequest(ServiceRequestCreate, table=True):
    __tablename__ = "service_requests"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    # Stamped by SubmissionStore.insert at write time; the server default covers
    # rows written outside the application.
    created_at: Optional[datetime] = Field(
        default=None,
        index=True,
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.current_timestamp()},
    )


class ServiceRequestRead(BaseModel):
    """Row shape served to the admin dashboard (``Id`` keeps its historical casing)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = PydanticField(alias="Id")
    name: str
    contact_number: str
    service: str
    description: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: ServiceRequest) -> "ServiceRequestRead":
        return cls(
            id=row.id,
            name=row.name,
            contact_number=row.contact_number,
            service=row.service,
            description=row.description,
            created_at=row.created_at,
        )


__all__ = ["ServiceRequest", "ServiceRequestCreate", "ServiceRequestRead", "utcnow"]

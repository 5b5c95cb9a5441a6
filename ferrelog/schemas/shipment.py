# ferrelog/schemas/shipment.py
import re
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from ferrelog.schemas.order import OrderRead

_VEHICLE_RE = re.compile(r"^[A-Za-z0-9\s-]+$")


class ShipmentCreate(SQLModel):
    """
    Payload for assigning a vehicle and driver to a pending order.

    All four fields are required.
    """

    model_config = ConfigDict(extra="forbid")

    folio: uuid.UUID
    unidad: str = Field(max_length=80)
    placas: str = Field(max_length=20)
    chofer: str = Field(max_length=120)

    @field_validator("unidad", "placas")
    @classmethod
    def vehicle_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        if not _VEHICLE_RE.match(v):
            raise ValueError("only letters, digits, spaces and '-' are allowed")
        return v

    @field_validator("chofer")
    @classmethod
    def driver_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        if not all(ch.isalpha() or ch.isspace() for ch in v):
            raise ValueError("chofer may only contain letters and spaces")
        return v


class ShipmentRead(SQLModel):
    id: uuid.UUID
    folio: uuid.UUID
    unidad: str
    placas: str
    chofer: str
    created_at: datetime


class ShipmentAssigned(SQLModel):
    """
    Result of a successful assignment: the updated order plus its shipment.
    """

    order: OrderRead
    shipment: ShipmentRead

# ferrelog/models/shipment.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from ferrelog.models.order import utcnow


class Shipment(SQLModel, table=True):
    """
    Vehicle/driver assignment for an order.

    Created together with the Pendiente -> En Tránsito move.
    One row per order (unique folio).
    """

    __tablename__ = "embarque"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    folio: uuid.UUID = Field(
        foreign_key="pedido.folio",
        unique=True,
        index=True,
    )

    unidad: str = Field(
        description="Vehicle description, e.g. 'Nissan NP300'",
    )

    placas: str = Field(
        description="Plate number",
    )

    chofer: str = Field(
        description="Driver full name",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        description="Creation timestamp (UTC)",
    )

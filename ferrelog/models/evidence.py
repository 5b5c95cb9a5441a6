# ferrelog/models/evidence.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from ferrelog.models.order import utcnow


class DeliveryEvidence(SQLModel, table=True):
    """
    Evidence recorded when a delivery fails (En Tránsito -> No Encontrado).
    """

    __tablename__ = "evidencias_entrega"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    folio: uuid.UUID = Field(
        foreign_key="pedido.folio",
        index=True,
    )

    # data:<mime>;base64,<payload>
    evidencia_fotografica: str = Field(
        description="Photo embedded as a base64 data URL",
    )

    motivo: str = Field(
        description="Driver's observation on why the delivery failed",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        description="Creation timestamp (UTC)",
    )

# ferrelog/schemas/evidence.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel

from ferrelog.schemas.order import OrderRead


class EvidenceRead(SQLModel):
    id: uuid.UUID
    folio: uuid.UUID
    motivo: str
    evidencia_fotografica: str
    created_at: datetime


class DeliveryResult(SQLModel):
    """
    Outcome of confirming or failing a delivery.

    `evidence` is only present for No Encontrado.
    """

    order: OrderRead
    evidence: EvidenceRead | None = None

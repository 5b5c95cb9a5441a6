# ferrelog/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(SQLModel, table=True):
    """
    Customer order (ticket) waiting for, or out on, delivery.

    Column names follow the hosted table:
      - folio, no_tiket, nombre_cliente, telefono, monto_de_compra,
        unidades, costo_de_envio, estado, created_at, updated_at

    `nombre_cliente` holds "<name> | <address>"; split it with
    `split_customer()` from ferrelog.schemas.order.
    """

    __tablename__ = "pedido"

    folio: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    no_tiket: str = Field(
        index=True,
        description="Store sale ticket number (distinct from folio)",
    )

    nombre_cliente: str = Field(
        description="Customer name and delivery address joined with ' | '",
    )

    telefono: str = Field(
        description="Contact phone number for delivery",
    )

    monto_de_compra: float = Field(
        default=0,
        ge=0,
        description="Purchase subtotal",
    )

    unidades: int = Field(
        default=0,
        ge=0,
        description="Number of pieces",
    )

    # Copied from the quoted zone; the zone itself is not stored
    costo_de_envio: float = Field(
        default=0,
        ge=0,
        description="Shipping cost",
    )

    # Pendiente | En Tránsito | Entregado | No Encontrado | Cancelado
    estado: str = Field(
        default="Pendiente",
        index=True,
        description="Order status lifecycle",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime | None = Field(
        default=None,
        description="Last modification timestamp (UTC)",
    )

# ferrelog/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# Status values exactly as stored in pedido.estado
STATUS_PENDING = "Pendiente"
STATUS_IN_TRANSIT = "En Tránsito"
STATUS_DELIVERED = "Entregado"
STATUS_NOT_FOUND = "No Encontrado"
STATUS_CANCELLED = "Cancelado"

OrderStatus = Literal[
    "Pendiente",
    "En Tránsito",
    "Entregado",
    "No Encontrado",
    "Cancelado",
]

ALL_STATUSES: tuple[str, ...] = (
    STATUS_PENDING,
    STATUS_IN_TRANSIT,
    STATUS_DELIVERED,
    STATUS_NOT_FOUND,
    STATUS_CANCELLED,
)

# nombre_cliente = "<name> | <address>"
CUSTOMER_SEPARATOR = "|"


def join_customer(name: str, address: str) -> str:
    return f"{name.strip()} {CUSTOMER_SEPARATOR} {address.strip()}"


def split_customer(nombre_cliente: str) -> tuple[str, str | None]:
    """
    Split the combined customer field into (name, address).

    Rows without a separator only carry a name.
    """
    name, sep, address = nombre_cliente.partition(CUSTOMER_SEPARATOR)
    if not sep:
        return nombre_cliente.strip(), None
    return name.strip(), address.strip() or None


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


class OrderCreate(SQLModel):
    """
    Payload for registering an order at the counter.

    Client provides:
      - no_tiket, nombre, direccion, telefono (required)
      - monto_de_compra, unidades
      - costo_de_envio, or zona_id to copy the zone price
      - no_vendedor (optional, up to 4 digits). Validated at the counter
        but not stored: pedido has no vendor column.

    Backend derives:
      - folio (UUID)
      - nombre_cliente = "<nombre> | <direccion>"
      - estado = 'Pendiente'
    """

    model_config = ConfigDict(extra="forbid")

    no_tiket: str = Field(max_length=50)
    no_vendedor: str | None = None
    nombre: str = Field(max_length=120)
    direccion: str = Field(max_length=300)
    telefono: str = Field(max_length=20)
    monto_de_compra: float = Field(default=0, ge=0)
    unidades: int = Field(default=0, ge=0)
    costo_de_envio: float | None = Field(default=None, ge=0)
    zona_id: str | None = None

    @field_validator("no_tiket", "direccion")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("nombre")
    @classmethod
    def letters_only(cls, v: str) -> str:
        v = _strip_required(v)
        if not all(ch.isalpha() or ch.isspace() for ch in v):
            raise ValueError("nombre may only contain letters and spaces")
        if CUSTOMER_SEPARATOR in v:
            raise ValueError("nombre cannot contain '|'")
        return v

    @field_validator("telefono")
    @classmethod
    def digits_only(cls, v: str) -> str:
        v = "".join(v.split())
        if not v.isdigit():
            raise ValueError("telefono may only contain digits")
        return v

    @field_validator("no_vendedor")
    @classmethod
    def vendor_number(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if not v.isdigit() or len(v) > 4:
            raise ValueError("no_vendedor must be up to 4 digits")
        return v


class OrderRead(SQLModel):
    """
    Order as returned to clients.
    """

    folio: uuid.UUID
    no_tiket: str
    nombre_cliente: str
    telefono: str
    monto_de_compra: float
    unidades: int
    costo_de_envio: float
    estado: OrderStatus
    created_at: datetime
    updated_at: datetime | None = None


class OrderAdminUpdate(SQLModel):
    """
    Admin edit of an order. All fields optional.

    `estado` is not checked against the lifecycle here; the admin panel
    is the escape hatch for fixing records by hand.
    """

    model_config = ConfigDict(extra="forbid")

    estado: OrderStatus | None = None
    no_tiket: str | None = Field(default=None, max_length=50)
    monto_de_compra: float | None = Field(default=None, ge=0)
    costo_de_envio: float | None = Field(default=None, ge=0)
    unidades: int | None = Field(default=None, ge=0)
    telefono: str | None = Field(default=None, max_length=20)

    @field_validator("no_tiket")
    @classmethod
    def normalize_ticket(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v)

    @field_validator("telefono")
    @classmethod
    def digits_only(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = "".join(v.split())
        if not v.isdigit():
            raise ValueError("telefono may only contain digits")
        return v

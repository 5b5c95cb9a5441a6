# ferrelog/schemas/ticket.py
from datetime import datetime

from sqlmodel import SQLModel


class TicketData(SQLModel):
    """
    Everything printed on an 80mm shipment ticket.

    Money fields are plain floats; templates format them with 2 decimals.
    """

    store_name: str
    store_location: str
    title: str = "Embarque de Salida"
    printed_at: datetime

    folio: str
    folio_short: str
    no_tiket: str

    unidad: str
    placas: str
    chofer: str

    customer_name: str
    customer_address: str | None
    telefono: str

    unidades: int
    subtotal: float
    shipping: float
    total: float

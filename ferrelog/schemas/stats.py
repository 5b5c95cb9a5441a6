# ferrelog/schemas/stats.py
from pydantic import ConfigDict
from sqlmodel import SQLModel

from ferrelog.schemas.order import OrderStatus


class StatusCount(SQLModel):
    """
    Number of orders in one status, with its chart label.
    """
    model_config = ConfigDict(extra="forbid")

    estado: OrderStatus
    etiqueta: str
    total: int


class OrderStatusStats(SQLModel):
    """
    Payload for the admin dashboard bar chart.
    """
    model_config = ConfigDict(extra="forbid")

    total_orders: int
    by_status: list[StatusCount]

# ferrelog/repositories/order_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from ferrelog.models.order import Order


class OrderRepository:
    """
    Data access layer for the pedido table.

    NOTE:
      - No commits here; status changes go together with shipment or
        evidence inserts. The service is responsible for session.commit().
    """

    def list_orders(
        self,
        session: Session,
        estado: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = select(Order)
        if estado is not None:
            stmt = stmt.where(Order.estado == estado)
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_created_between(
        self,
        session: Session,
        start: datetime,
        end: datetime,
    ) -> list[Order]:
        """
        Orders with start <= created_at <= end, oldest first.
        """
        stmt = (
            select(Order)
            .where(Order.created_at >= start, Order.created_at <= end)
            .order_by(Order.created_at)
        )
        return list(session.exec(stmt).all())

    def get_by_folio(self, session: Session, folio: uuid.UUID) -> Order | None:
        return session.get(Order, folio)

    def create(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure folio is populated.
        """
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    def update(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    def delete(self, session: Session, order: Order) -> None:
        session.delete(order)
        session.flush()

# ferrelog/repositories/shipment_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from ferrelog.models.shipment import Shipment


class ShipmentRepository:
    """
    Data access layer for the embarque table. No commits.
    """

    def get_for_order(self, session: Session, folio: uuid.UUID) -> Shipment | None:
        stmt = select(Shipment).where(Shipment.folio == folio)
        return session.exec(stmt).first()

    def list_created_between(
        self,
        session: Session,
        start: datetime,
        end: datetime,
    ) -> list[Shipment]:
        stmt = (
            select(Shipment)
            .where(Shipment.created_at >= start, Shipment.created_at <= end)
            .order_by(Shipment.created_at)
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, shipment: Shipment) -> Shipment:
        session.add(shipment)
        session.flush()
        session.refresh(shipment)
        return shipment

    def delete_for_order(self, session: Session, folio: uuid.UUID) -> int:
        """
        Delete the assignment of an order, if any.

        Returns:
            Number of rows deleted (0 or 1).
        """
        rows = list(session.exec(select(Shipment).where(Shipment.folio == folio)).all())
        for row in rows:
            session.delete(row)
        session.flush()
        return len(rows)

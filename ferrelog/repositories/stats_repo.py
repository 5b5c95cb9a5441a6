# ferrelog/repositories/stats_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from ferrelog.models.order import Order


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.
    """

    def count_orders(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Order)
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_by_status(self, session: Session) -> dict[str, int]:
        """
        Number of orders per estado. Statuses with no orders are absent.
        """
        stmt = select(Order.estado, func.count(Order.folio)).group_by(Order.estado)
        return {estado: int(total or 0) for estado, total in session.exec(stmt).all()}

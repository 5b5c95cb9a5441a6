# ferrelog/services/stats_service.py
from sqlmodel import Session

from ferrelog.repositories.stats_repo import StatsRepository
from ferrelog.schemas.order import (
    STATUS_CANCELLED,
    STATUS_DELIVERED,
    STATUS_IN_TRANSIT,
    STATUS_NOT_FOUND,
    STATUS_PENDING,
)
from ferrelog.schemas.stats import OrderStatusStats, StatusCount

# Bar order and labels of the dashboard chart
CHART_LABELS: dict[str, str] = {
    STATUS_DELIVERED: "Entregados",
    STATUS_IN_TRANSIT: "En Tránsito",
    STATUS_PENDING: "Pendientes",
    STATUS_NOT_FOUND: "Incidencias",
    STATUS_CANCELLED: "Cancelados",
}


class StatsService:
    """
    Order counts per status for the admin dashboard.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_status_stats(self, session: Session) -> OrderStatusStats:
        counts = self.repo.count_by_status(session)
        by_status = [
            StatusCount(estado=estado, etiqueta=label, total=counts.get(estado, 0))
            for estado, label in CHART_LABELS.items()
        ]
        return OrderStatusStats(
            total_orders=self.repo.count_orders(session),
            by_status=by_status,
        )

# ferrelog/routers/admin.py
import uuid
from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from ferrelog.core.auth import require_admin
from ferrelog.core.notifier import order_changes
from ferrelog.database import get_session
from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.repositories.stats_repo import StatsRepository
from ferrelog.schemas.evidence import EvidenceRead
from ferrelog.schemas.order import OrderAdminUpdate, OrderRead, OrderStatus
from ferrelog.schemas.stats import OrderStatusStats
from ferrelog.services.delivery_service import DeliveryService
from ferrelog.services.order_service import OrderService
from ferrelog.services.report_service import ReportService, ReportType, default_range
from ferrelog.services.stats_service import StatsService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

order_repo = OrderRepository()
shipment_repo = ShipmentRepository()
evidence_repo = EvidenceRepository()

stats_service = StatsService(StatsRepository())
order_service = OrderService(order_repo, shipment_repo, evidence_repo, order_changes)
delivery_service = DeliveryService(order_repo, evidence_repo, order_changes)
report_service = ReportService(order_repo, shipment_repo, evidence_repo)


@router.get("/stats", response_model=OrderStatusStats)
def get_status_stats(session: Session = Depends(get_session)):
    """
    Order counts per status for the dashboard chart.

    Every status is present, with zero when it has no orders.
    """
    return stats_service.get_status_stats(session)


# -------- Order management --------


@router.get("/orders", response_model=list[OrderRead])
def list_orders(
    session: Session = Depends(get_session),
    estado: OrderStatus | None = None,
    skip: int = 0,
    limit: int = 100,
):
    return order_service.list_orders(session, estado=estado, skip=skip, limit=limit)


@router.patch("/orders/{folio}", response_model=OrderRead)
def update_order(
    folio: uuid.UUID,
    payload: OrderAdminUpdate,
    session: Session = Depends(get_session),
):
    """
    Edit an order. Status may be set to any value, lifecycle included.
    """
    return order_service.update_order_admin(session, folio, payload)


@router.delete("/orders/{folio}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete an order with its shipment and delivery evidence.
    """
    order_service.delete_order(session, folio)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/orders/{folio}/evidence", response_model=list[EvidenceRead])
def list_order_evidence(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Failed-delivery evidence of one order, oldest first.
    """
    return delivery_service.list_evidence(session, folio)


# -------- Reports --------


@router.get("/reports/{report_type}")
def export_report(
    report_type: ReportType,
    start_date: date | None = None,
    end_date: date | None = None,
    session: Session = Depends(get_session),
):
    """
    Download a CSV report.

    Query params (optional):
      - start_date: YYYY-MM-DD, defaults to the first day of this month
      - end_date: YYYY-MM-DD, defaults to today

    Both days are included.
    """
    default_start, default_end = default_range()
    filename, content = report_service.export_csv(
        session=session,
        report_type=report_type,
        start_date=start_date or default_start,
        end_date=end_date or default_end,
    )
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

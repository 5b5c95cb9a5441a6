# ferrelog/services/report_service.py
import csv
import io
from datetime import date, datetime, time, timezone
from typing import Literal

from fastapi import HTTPException, status
from sqlmodel import Session

from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository

ReportType = Literal["orders", "shipments", "evidence"]

REPORT_HEADERS: dict[str, list[str]] = {
    "orders": ["Fecha", "Ticket", "Cliente", "Telefono", "Unidades", "Estado", "Monto"],
    "shipments": ["Fecha", "Folio", "Unidad", "Placas", "Chofer"],
    "evidence": ["Fecha", "Folio", "Motivo"],
}

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """
    [start 00:00:00, end 23:59:59.999999] in UTC, both ends inclusive.
    """
    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(end_date, time.max, tzinfo=timezone.utc)
    return start, end


def report_filename(report_type: str, start_date: date) -> str:
    return f"reporte_{report_type}_{start_date.isoformat()}.csv"


def default_range(today: date | None = None) -> tuple[date, date]:
    """First day of the current month through today."""
    today = today or date.today()
    return today.replace(day=1), today


class ReportService:
    """
    CSV exports for the admin panel.

    Each report lists the rows whose created_at falls within the
    requested days. Values go through csv.writer, so commas and quotes
    inside customer names or reasons are escaped.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        shipment_repo: ShipmentRepository,
        evidence_repo: EvidenceRepository,
    ):
        self.order_repo = order_repo
        self.shipment_repo = shipment_repo
        self.evidence_repo = evidence_repo

    def _rows(
        self,
        session: Session,
        report_type: ReportType,
        start: datetime,
        end: datetime,
    ) -> list[list]:
        if report_type == "orders":
            return [
                [
                    o.created_at.strftime(DATE_FORMAT),
                    o.no_tiket,
                    o.nombre_cliente,
                    o.telefono,
                    o.unidades,
                    o.estado,
                    f"{o.monto_de_compra:.2f}",
                ]
                for o in self.order_repo.list_created_between(session, start, end)
            ]

        if report_type == "shipments":
            return [
                [s.created_at.strftime(DATE_FORMAT), str(s.folio), s.unidad, s.placas, s.chofer]
                for s in self.shipment_repo.list_created_between(session, start, end)
            ]

        return [
            [e.created_at.strftime(DATE_FORMAT), str(e.folio), e.motivo]
            for e in self.evidence_repo.list_created_between(session, start, end)
        ]

    def export_csv(
        self,
        session: Session,
        report_type: ReportType,
        start_date: date,
        end_date: date,
    ) -> tuple[str, str]:
        """
        Build a CSV report.

        Returns:
            (filename, csv text). Filename: reporte_<type>_<start>.csv

        Raises:
            HTTPException(400): if start_date is after end_date.
        """
        if start_date > end_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="La fecha de inicio no puede ser posterior a la fecha fin",
            )

        start, end = day_bounds(start_date, end_date)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(REPORT_HEADERS[report_type])
        writer.writerows(self._rows(session, report_type, start, end))

        return report_filename(report_type, start_date), buffer.getvalue()

# ferrelog/services/ticket_service.py
"""
Shipment tickets for the 80mm receipt printer.

Two outputs share the same TicketData:
  - HTML page (templates/ticket.html) sized with @page 80mm, printed
    from the browser
  - PDF with a fixed 80 x 200 mm page, rendered with reportlab
"""
import uuid
from datetime import datetime
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape

from fastapi import HTTPException, status
from fastapi.templating import Jinja2Templates
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlmodel import Session

from ferrelog.core.config import Settings
from ferrelog.models.order import Order
from ferrelog.models.shipment import Shipment
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.schemas.order import split_customer
from ferrelog.schemas.ticket import TicketData


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

PAGE_SIZE = (80 * mm, 200 * mm)
PAGE_MARGIN = 4 * mm
MISSING = "N/A"


def build_ticket(
    order: Order,
    shipment: Shipment | None,
    settings: Settings,
    printed_at: datetime | None = None,
) -> TicketData:
    """
    Compose the ticket for an order and, if assigned, its shipment.

    total = monto_de_compra + costo_de_envio
    """
    name, address = split_customer(order.nombre_cliente)
    folio = str(order.folio)
    subtotal = float(order.monto_de_compra or 0)
    shipping = float(order.costo_de_envio or 0)

    return TicketData(
        store_name=settings.STORE_NAME,
        store_location=settings.STORE_LOCATION,
        printed_at=printed_at or datetime.now(),
        folio=folio,
        folio_short=folio[:8],
        no_tiket=order.no_tiket,
        unidad=shipment.unidad if shipment else MISSING,
        placas=shipment.placas if shipment else MISSING,
        chofer=shipment.chofer if shipment else MISSING,
        customer_name=name,
        customer_address=address,
        telefono=order.telefono,
        unidades=order.unidades,
        subtotal=round(subtotal, 2),
        shipping=round(shipping, 2),
        total=round(subtotal + shipping, 2),
    )


def ticket_filename(ticket: TicketData) -> str:
    return f"Embarque_{ticket.no_tiket}.pdf"


def money(value: float) -> str:
    return f"${value:,.2f}"


def render_pdf(ticket: TicketData) -> bytes:
    """
    Render the ticket as an 80 x 200 mm PDF and return its bytes.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        rightMargin=PAGE_MARGIN,
        leftMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=ticket_filename(ticket),
    )
    width = PAGE_SIZE[0] - 2 * PAGE_MARGIN

    styles = getSampleStyleSheet()
    header_style = ParagraphStyle(
        "TicketHeader",
        parent=styles["Heading2"],
        fontName="Helvetica-BoldOblique",
        fontSize=13,
        alignment=TA_CENTER,
        spaceAfter=2,
    )
    small_center = ParagraphStyle(
        "TicketSmallCenter",
        parent=styles["Normal"],
        fontSize=7,
        leading=9,
        alignment=TA_CENTER,
    )
    body = ParagraphStyle(
        "TicketBody",
        parent=styles["Normal"],
        fontSize=8,
        leading=10,
    )

    def rows_table(rows: list[list[str]], bold_last: bool = False) -> Table:
        table = Table(rows, colWidths=[width * 0.4, width * 0.6])
        commands = [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("TOPPADDING", (0, 0), (-1, -1), 1),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]
        if bold_last:
            commands += [
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, -1), (-1, -1), 10),
                ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.black),
            ]
        table.setStyle(TableStyle(commands))
        return table

    elements = [
        Paragraph(escape(ticket.store_name), header_style),
        Paragraph(escape(ticket.store_location), small_center),
        Paragraph(f"<b>{escape(ticket.title.upper())}</b>", small_center),
        Spacer(1, 3 * mm),
        rows_table(
            [
                ["FECHA:", ticket.printed_at.strftime("%d/%m/%Y %H:%M")],
                ["FOLIO:", ticket.folio_short],
                ["TICKET:", ticket.no_tiket],
            ]
        ),
        Spacer(1, 2 * mm),
        rows_table(
            [
                ["UNIDAD:", ticket.unidad],
                ["PLACAS:", ticket.placas],
                ["CHOFER:", ticket.chofer],
            ]
        ),
        Spacer(1, 2 * mm),
        Paragraph("<b>DATOS DE ENTREGA:</b>", body),
        Paragraph(escape(ticket.customer_name), body),
    ]
    if ticket.customer_address:
        elements.append(Paragraph(escape(ticket.customer_address), body))
    elements += [
        Paragraph(f"Tel. {escape(ticket.telefono)}", body),
        Spacer(1, 2 * mm),
        rows_table(
            [
                ["UNIDADES:", f"{ticket.unidades} pzs"],
                ["SUBTOTAL:", money(ticket.subtotal)],
                ["ENVIO:", money(ticket.shipping)],
                ["TOTAL A COBRAR:", money(ticket.total)],
            ],
            bold_last=True,
        ),
        Spacer(1, 12 * mm),
        Paragraph("_" * 30, small_center),
        Paragraph("Firma de Recibido / Sello", small_center),
        Spacer(1, 10 * mm),
        Paragraph("_" * 30, small_center),
        Paragraph("Validación Seguridad Física", small_center),
        Spacer(1, 4 * mm),
        Paragraph(f"*** {escape(ticket.store_name.upper())} ***", small_center),
    ]

    doc.build(elements)
    return buffer.getvalue()


class TicketService:
    """
    Loads an order and its shipment and turns them into a ticket.

    Orders without a shipment (admin reprint of a pending order) print
    N/A in the vehicle block.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        shipment_repo: ShipmentRepository,
        settings: Settings,
    ):
        self.order_repo = order_repo
        self.shipment_repo = shipment_repo
        self.settings = settings

    def get_ticket(self, session: Session, folio: uuid.UUID) -> TicketData:
        order = self.order_repo.get_by_folio(session, folio)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pedido no encontrado",
            )
        shipment = self.shipment_repo.get_for_order(session, folio)
        return build_ticket(order, shipment, self.settings)

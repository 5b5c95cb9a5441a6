# ferrelog/routers/shipments.py
import uuid

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse
from sqlmodel import Session

from ferrelog.core.auth import require_auth
from ferrelog.core.config import get_settings
from ferrelog.core.notifier import order_changes
from ferrelog.database import get_session
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.schemas.order import OrderRead
from ferrelog.schemas.shipment import ShipmentAssigned, ShipmentCreate, ShipmentRead
from ferrelog.services.shipment_service import ShipmentService
from ferrelog.services.ticket_service import (
    TicketService,
    render_pdf,
    templates,
    ticket_filename,
)

router = APIRouter(
    prefix="/shipments",
    tags=["Shipments"],
    dependencies=[Depends(require_auth)],
)

order_repo = OrderRepository()
shipment_repo = ShipmentRepository()
service = ShipmentService(order_repo, shipment_repo, order_changes)
tickets = TicketService(order_repo, shipment_repo, get_settings())


@router.get("/pending", response_model=list[OrderRead])
def list_pending_orders(session: Session = Depends(get_session)):
    """
    Orders waiting for a vehicle ('Pendiente'), newest first.
    """
    return service.list_pending_orders(session)


@router.post(
    "",
    response_model=ShipmentAssigned,
    status_code=status.HTTP_201_CREATED,
)
def assign_shipment(
    payload: ShipmentCreate,
    session: Session = Depends(get_session),
):
    """
    Assign vehicle, plates and driver; the order moves to 'En Tránsito'.

    - 404 if the order does not exist.
    - 409 if the order is not 'Pendiente' or already has a shipment.
    """
    return service.assign(session, payload)


@router.get("/{folio}", response_model=ShipmentRead)
def get_shipment(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_for_order(session, folio)


@router.get("/{folio}/ticket", response_class=HTMLResponse)
def print_ticket(
    request: Request,
    folio: uuid.UUID,
    autoprint: bool = False,
    session: Session = Depends(get_session),
):
    """
    Printable 80mm ticket. `autoprint=true` opens the print dialog on load.
    """
    ticket = tickets.get_ticket(session, folio)
    return templates.TemplateResponse(
        request,
        "ticket.html",
        {"ticket": ticket, "autoprint": autoprint},
    )


@router.get("/{folio}/ticket.pdf")
def download_ticket_pdf(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Same ticket as a PDF with an 80 x 200 mm page.
    """
    ticket = tickets.get_ticket(session, folio)
    return Response(
        content=render_pdf(ticket),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{ticket_filename(ticket)}"'
        },
    )

# ferrelog/routers/orders.py
import json
import uuid

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from sqlmodel import Session

from ferrelog.core.auth import require_auth
from ferrelog.core.notifier import order_changes
from ferrelog.database import get_session
from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.schemas.order import OrderCreate, OrderRead, OrderStatus
from ferrelog.services.order_service import OrderService

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    dependencies=[Depends(require_auth)],
)

service = OrderService(
    OrderRepository(),
    ShipmentRepository(),
    EvidenceRepository(),
    order_changes,
)


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    """
    Register an order at the counter.

    - Always created as 'Pendiente'.
    - Pass `zona_id` instead of `costo_de_envio` to charge the zone price.
    """
    return service.create_order(session, payload)


@router.get("", response_model=list[OrderRead])
def list_orders(
    session: Session = Depends(get_session),
    estado: OrderStatus | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """
    List orders newest first, optionally filtered by status.
    """
    return service.list_orders(session, estado=estado, skip=skip, limit=limit)


async def _change_events():
    async for change in order_changes.subscribe():
        yield f"data: {json.dumps(change, ensure_ascii=False)}\n\n"


@router.get("/changes")
async def stream_order_changes(session: Session = Depends(get_session)):
    """
    Server-sent events, one per order insert/update/delete.

    Screens listing orders re-fetch their list when an event arrives.

    `session` is the one the auth dependency used to load the user; it is
    closed before streaming so the open stream holds no pooled connection.
    """
    session.close()
    return StreamingResponse(_change_events(), media_type="text/event-stream")


@router.get("/{folio}", response_model=OrderRead)
def get_order(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_order(session, folio)

# ferrelog/routers/deliveries.py
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlmodel import Session

from ferrelog.core.auth import require_auth
from ferrelog.core.notifier import order_changes
from ferrelog.database import get_session
from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.schemas.evidence import DeliveryResult
from ferrelog.schemas.order import OrderRead
from ferrelog.services.delivery_service import MAX_PHOTO_BYTES, DeliveryService

router = APIRouter(
    prefix="/deliveries",
    tags=["Deliveries"],
    dependencies=[Depends(require_auth)],
)

service = DeliveryService(OrderRepository(), EvidenceRepository(), order_changes)


def read_photo(foto: UploadFile) -> bytes:
    """
    Read the upload up to one byte past the size limit; that is enough
    for the service to reject it with 413.
    """
    return foto.file.read(MAX_PHOTO_BYTES + 1)


@router.get("/in-transit", response_model=list[OrderRead])
def list_in_transit_orders(session: Session = Depends(get_session)):
    """
    Orders out for delivery ('En Tránsito').
    """
    return service.list_in_transit_orders(session)


@router.post("/{folio}/delivered", response_model=DeliveryResult)
def mark_delivered(
    folio: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    'En Tránsito' -> 'Entregado'. No evidence needed.
    """
    return service.mark_delivered(session, folio)


@router.post("/{folio}/not-found", response_model=DeliveryResult)
def report_not_found(
    folio: uuid.UUID,
    motivo: str = Form(""),
    foto: UploadFile | None = File(None),
    session: Session = Depends(get_session),
):
    """
    'En Tránsito' -> 'No Encontrado' with photo evidence.

    Multipart form:
      - motivo: driver's observation (required)
      - foto: JPEG/PNG/WEBP photo, max 5MB (required)
    """
    photo_bytes = read_photo(foto) if foto is not None else None
    content_type = foto.content_type if foto is not None else None
    return service.report_not_found(
        session=session,
        folio=folio,
        motivo=motivo,
        content_type=content_type,
        photo_bytes=photo_bytes,
    )

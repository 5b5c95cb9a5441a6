# ferrelog/services/delivery_service.py
import base64
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from ferrelog.core.notifier import OrderChangeNotifier
from ferrelog.database import unit_of_work
from ferrelog.models.evidence import DeliveryEvidence
from ferrelog.models.order import Order, utcnow
from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.schemas.evidence import DeliveryResult, EvidenceRead
from ferrelog.schemas.order import (
    STATUS_DELIVERED,
    STATUS_IN_TRANSIT,
    STATUS_NOT_FOUND,
    OrderRead,
)
from ferrelog.services.lifecycle import assert_transition

logger = logging.getLogger(__name__)

# --- Evidence photo config ---

MAX_PHOTO_BYTES = 5 * 1024 * 1024  # 5MB per photo

ALLOWED_PHOTO_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}

IN_TRANSIT_LIST_LIMIT = 200


def encode_photo(content_type: str, photo_bytes: bytes) -> str:
    """
    Embed a photo as a data URL, e.g. "data:image/jpeg;base64,/9j/4AAQ...".
    """
    payload = base64.b64encode(photo_bytes).decode("ascii")
    return f"data:{content_type};base64,{payload}"


class DeliveryService:
    """
    Records the outcome of a delivery run.

    Responsibilities:
      - En Tránsito -> Entregado (no evidence)
      - En Tránsito -> No Encontrado (reason + photo mandatory),
        status change and evidence insert in one transaction
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        evidence_repo: EvidenceRepository,
        notifier: OrderChangeNotifier,
    ):
        self.order_repo = order_repo
        self.evidence_repo = evidence_repo
        self.notifier = notifier

    # ----- Helpers -----

    def _get_order(self, session: Session, folio: uuid.UUID) -> Order:
        order = self.order_repo.get_by_folio(session, folio)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pedido no encontrado",
            )
        return order

    @staticmethod
    def _validate_photo(content_type: str | None, photo_bytes: bytes | None) -> str:
        if not photo_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Es necesario adjuntar evidencia fotográfica.",
            )

        if content_type not in ALLOWED_PHOTO_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Formato de foto no soportado. Permitidos: JPEG, PNG, WEBP.",
            )

        if len(photo_bytes) > MAX_PHOTO_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Foto demasiado grande (máx. 5MB).",
            )

        return content_type

    # ----- Operations -----

    def list_in_transit_orders(self, session: Session) -> list[Order]:
        return self.order_repo.list_orders(
            session, estado=STATUS_IN_TRANSIT, limit=IN_TRANSIT_LIST_LIMIT
        )

    def list_evidence(self, session: Session, folio: uuid.UUID) -> list[DeliveryEvidence]:
        order = self._get_order(session, folio)
        return self.evidence_repo.list_for_order(session, order.folio)

    def mark_delivered(self, session: Session, folio: uuid.UUID) -> DeliveryResult:
        order = self._get_order(session, folio)
        assert_transition(order.estado, STATUS_DELIVERED)

        with unit_of_work(session, "Error al actualizar la entrega"):
            order.estado = STATUS_DELIVERED
            order.updated_at = utcnow()
            self.order_repo.update(session, order)
        session.refresh(order)

        logger.info("Order %s delivered", order.folio)
        self.notifier.publish("UPDATE", order.folio, order.estado)
        return DeliveryResult(order=OrderRead.model_validate(order))

    def report_not_found(
        self,
        session: Session,
        folio: uuid.UUID,
        motivo: str | None,
        content_type: str | None,
        photo_bytes: bytes | None,
    ) -> DeliveryResult:
        """
        Flag a failed delivery.

        Checks, in order:
          - order exists (404)
          - reason is not blank (400)
          - photo attached, JPEG/PNG/WEBP, <= 5MB (400 / 413)
          - En Tránsito -> No Encontrado allowed (409)
        """
        order = self._get_order(session, folio)

        motivo = (motivo or "").strip()
        if not motivo:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Por favor ingrese una observación.",
            )

        content_type = self._validate_photo(content_type, photo_bytes)
        assert_transition(order.estado, STATUS_NOT_FOUND)

        with unit_of_work(session, "Error al reportar incidencia"):
            order.estado = STATUS_NOT_FOUND
            order.updated_at = utcnow()
            self.order_repo.update(session, order)

            evidence = self.evidence_repo.create(
                session,
                DeliveryEvidence(
                    folio=order.folio,
                    evidencia_fotografica=encode_photo(content_type, photo_bytes),
                    motivo=motivo,
                ),
            )

        session.refresh(order)
        session.refresh(evidence)

        logger.info("Order %s not delivered: %s", order.folio, motivo)
        self.notifier.publish("UPDATE", order.folio, order.estado)
        return DeliveryResult(
            order=OrderRead.model_validate(order),
            evidence=EvidenceRead.model_validate(evidence),
        )

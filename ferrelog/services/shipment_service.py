# ferrelog/services/shipment_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from ferrelog.core.notifier import OrderChangeNotifier
from ferrelog.database import unit_of_work
from ferrelog.models.order import Order, utcnow
from ferrelog.models.shipment import Shipment
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.schemas.order import STATUS_IN_TRANSIT, STATUS_PENDING, OrderRead
from ferrelog.schemas.shipment import ShipmentAssigned, ShipmentCreate, ShipmentRead
from ferrelog.services.lifecycle import assert_transition

logger = logging.getLogger(__name__)

# Upper bound for the dropdown of pending orders
PENDING_LIST_LIMIT = 200

DUPLICATE_SHIPMENT_DETAIL = "El pedido ya tiene un embarque asignado"


class ShipmentService:
    """
    Assigns vehicle, plates and driver to pending orders.

    The Pendiente -> En Tránsito move and the embarque insert are one
    transaction: an order is never left En Tránsito without its shipment.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        shipment_repo: ShipmentRepository,
        notifier: OrderChangeNotifier,
    ):
        self.order_repo = order_repo
        self.shipment_repo = shipment_repo
        self.notifier = notifier

    def list_pending_orders(self, session: Session) -> list[Order]:
        return self.order_repo.list_orders(
            session, estado=STATUS_PENDING, limit=PENDING_LIST_LIMIT
        )

    def assign(self, session: Session, payload: ShipmentCreate) -> ShipmentAssigned:
        """
        Steps:
          1. Load the order (404 if missing).
          2. Check Pendiente -> En Tránsito is allowed (409 otherwise).
          3. Refuse a second assignment for the same order (409),
             also when a concurrent one wins the race on embarque.folio.
          4. Update status and insert the shipment, then commit once.
        """
        order = self.order_repo.get_by_folio(session, payload.folio)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No se encontró la información del pedido",
            )

        assert_transition(order.estado, STATUS_IN_TRANSIT)

        if self.shipment_repo.get_for_order(session, order.folio) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=DUPLICATE_SHIPMENT_DETAIL,
            )

        with unit_of_work(
            session,
            "Error al guardar el embarque",
            conflict_detail=DUPLICATE_SHIPMENT_DETAIL,
        ):
            order.estado = STATUS_IN_TRANSIT
            order.updated_at = utcnow()
            self.order_repo.update(session, order)

            shipment = self.shipment_repo.create(
                session,
                Shipment(
                    folio=order.folio,
                    unidad=payload.unidad,
                    placas=payload.placas,
                    chofer=payload.chofer,
                ),
            )

        session.refresh(order)
        session.refresh(shipment)

        logger.info(
            "Order %s out for delivery: %s (%s), driver %s",
            order.folio,
            shipment.unidad,
            shipment.placas,
            shipment.chofer,
        )
        self.notifier.publish("UPDATE", order.folio, order.estado)
        return ShipmentAssigned(
            order=OrderRead.model_validate(order),
            shipment=ShipmentRead.model_validate(shipment),
        )

    def get_for_order(self, session: Session, folio: uuid.UUID) -> Shipment:
        shipment = self.shipment_repo.get_for_order(session, folio)
        if not shipment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="El pedido no tiene embarque",
            )
        return shipment

# ferrelog/services/order_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from ferrelog.core.notifier import OrderChangeNotifier
from ferrelog.core.zones import get_zone
from ferrelog.database import unit_of_work
from ferrelog.models.order import Order, utcnow
from ferrelog.repositories.evidence_repo import EvidenceRepository
from ferrelog.repositories.order_repo import OrderRepository
from ferrelog.repositories.shipment_repo import ShipmentRepository
from ferrelog.schemas.order import (
    STATUS_PENDING,
    OrderAdminUpdate,
    OrderCreate,
    join_customer,
)
from ferrelog.services.lifecycle import can_transition

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Register orders at the counter (always Pendiente)
      - Copy the quoted zone price into costo_de_envio
      - Admin edits (free status override, logged) and cascading deletes
      - Announce every change on the order notifier
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        shipment_repo: ShipmentRepository,
        evidence_repo: EvidenceRepository,
        notifier: OrderChangeNotifier,
    ):
        self.order_repo = order_repo
        self.shipment_repo = shipment_repo
        self.evidence_repo = evidence_repo
        self.notifier = notifier

    # -------- Counter operations --------

    def create_order(self, session: Session, payload: OrderCreate) -> Order:
        """
        Register a new order.

        Shipping cost precedence:
          1. costo_de_envio if given
          2. price of zona_id if given (400 if the zone is unknown)
          3. 0
        """
        shipping = payload.costo_de_envio
        if payload.zona_id is not None:
            zone = get_zone(payload.zona_id)
            if zone is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Zona desconocida: {payload.zona_id}",
                )
            if shipping is None:
                shipping = zone.price

        order = Order(
            no_tiket=payload.no_tiket,
            nombre_cliente=join_customer(payload.nombre, payload.direccion),
            telefono=payload.telefono,
            monto_de_compra=payload.monto_de_compra,
            unidades=payload.unidades,
            costo_de_envio=shipping or 0,
            estado=STATUS_PENDING,
        )
        with unit_of_work(session, "Error al guardar el pedido"):
            order = self.order_repo.create(session, order)
        session.refresh(order)

        logger.info("Order %s registered (ticket %s)", order.folio, order.no_tiket)
        self.notifier.publish("INSERT", order.folio, order.estado)
        return order

    def list_orders(
        self,
        session: Session,
        estado: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """
        List orders newest first, optionally filtered by estado.
        """
        return self.order_repo.list_orders(session, estado=estado, skip=skip, limit=limit)

    def get_order(self, session: Session, folio: uuid.UUID) -> Order:
        order = self.order_repo.get_by_folio(session, folio)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pedido no encontrado",
            )
        return order

    # -------- Admin operations --------

    def update_order_admin(
        self,
        session: Session,
        folio: uuid.UUID,
        payload: OrderAdminUpdate,
    ) -> Order:
        """
        Partial edit from the admin panel.

        Status is taken as given, even when it skips the lifecycle
        (e.g. Entregado -> Pendiente or anything -> Cancelado); such
        overrides are logged at WARNING.
        """
        order = self.get_order(session, folio)

        if payload.estado is not None and payload.estado != order.estado:
            if not can_transition(order.estado, payload.estado):
                logger.warning(
                    "Admin override of order %s status: %s -> %s",
                    order.folio,
                    order.estado,
                    payload.estado,
                )
            order.estado = payload.estado

        if payload.no_tiket is not None:
            order.no_tiket = payload.no_tiket

        if payload.monto_de_compra is not None:
            order.monto_de_compra = payload.monto_de_compra

        if payload.costo_de_envio is not None:
            order.costo_de_envio = payload.costo_de_envio

        if payload.unidades is not None:
            order.unidades = payload.unidades

        if payload.telefono is not None:
            order.telefono = payload.telefono

        order.updated_at = utcnow()
        with unit_of_work(session, "Error al actualizar el pedido"):
            self.order_repo.update(session, order)
        session.refresh(order)

        self.notifier.publish("UPDATE", order.folio, order.estado)
        return order

    def delete_order(self, session: Session, folio: uuid.UUID) -> None:
        """
        Physically delete an order and everything that hangs from it.

        Order of deletion: evidence rows, shipment row, order. All in
        one transaction; orders without dependents delete the same way.
        """
        order = self.get_order(session, folio)

        with unit_of_work(session, "Error al eliminar el pedido"):
            evidence_count = self.evidence_repo.delete_for_order(session, folio)
            shipment_count = self.shipment_repo.delete_for_order(session, folio)
            self.order_repo.delete(session, order)

        logger.info(
            "Order %s deleted (%d evidence rows, %d shipments)",
            folio,
            evidence_count,
            shipment_count,
        )
        self.notifier.publish("DELETE", folio, None)

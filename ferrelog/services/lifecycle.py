# ferrelog/services/lifecycle.py
from fastapi import HTTPException, status

from ferrelog.schemas.order import (
    STATUS_CANCELLED,
    STATUS_DELIVERED,
    STATUS_IN_TRANSIT,
    STATUS_NOT_FOUND,
    STATUS_PENDING,
)

# Moves reachable from the staff endpoints:
#
#   Pendiente   -> En Tránsito                (shipment assigned)
#   En Tránsito -> Entregado, No Encontrado   (delivery outcome)
#
# Entregado, No Encontrado and Cancelado are terminal. Nothing produces
# Cancelado; only the admin editor can set it.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    STATUS_PENDING: frozenset({STATUS_IN_TRANSIT}),
    STATUS_IN_TRANSIT: frozenset({STATUS_DELIVERED, STATUS_NOT_FOUND}),
    STATUS_DELIVERED: frozenset(),
    STATUS_NOT_FOUND: frozenset(),
    STATUS_CANCELLED: frozenset(),
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


def assert_transition(current: str, new: str) -> None:
    """
    Raises:
        HTTPException(409): if `current -> new` is not an allowed move.
    """
    if not can_transition(current, new):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Transición de estado inválida: {current} -> {new}",
        )

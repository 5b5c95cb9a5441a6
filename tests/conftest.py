import os
import uuid
from datetime import datetime

# Settings are read on import; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-secret")
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from ferrelog.core.auth import get_current_user
from ferrelog.database import get_session
from ferrelog.main import app
from ferrelog.models.order import Order
from ferrelog.models.user import User

ORDER_PAYLOAD = {
    "no_tiket": "T-1001",
    "nombre": "Juan Perez",
    "direccion": "Calle Hidalgo 12, Centro",
    "telefono": "761 123 4567",
    "monto_de_compra": 100.0,
    "unidades": 3,
    "costo_de_envio": 50.0,
}


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


def _add_user(session: Session, role: str) -> User:
    user = User(
        id=uuid.uuid4(),
        email=f"{role}@ferre.mx",
        name=role,
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def staff_user(session):
    return _add_user(session, "staff")


@pytest.fixture
def admin_user(session):
    return _add_user(session, "admin")


def _make_client(session: Session, user: User | None) -> TestClient:
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    return TestClient(app)


@pytest.fixture
def client(session, staff_user):
    yield _make_client(session, staff_user)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(session, admin_user):
    yield _make_client(session, admin_user)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(session):
    yield _make_client(session, None)
    app.dependency_overrides.clear()


@pytest.fixture
def order_payload():
    return dict(ORDER_PAYLOAD)


@pytest.fixture
def make_order(session):
    """Insert an order row directly, bypassing the intake endpoint."""

    def _make(
        estado: str = "Pendiente",
        created_at: datetime | None = None,
        **fields,
    ) -> Order:
        values = {
            "no_tiket": "T-1",
            "nombre_cliente": "Ana Lopez | Av. Juarez 5",
            "telefono": "7611234567",
            "monto_de_compra": 100.0,
            "unidades": 2,
            "costo_de_envio": 50.0,
            "estado": estado,
        }
        values.update(fields)
        order = Order(**values)
        if created_at is not None:
            order.created_at = created_at
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    return _make

import logging
import uuid
from datetime import date, datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ferrelog.models.evidence import DeliveryEvidence
from ferrelog.models.order import Order
from ferrelog.models.shipment import Shipment
from ferrelog.routers import admin as admin_router
from ferrelog.services.report_service import default_range, report_filename

API = "/api/v1"


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_admin_endpoints_reject_staff(client):
    assert client.get(f"{API}/admin/stats").status_code == 403
    assert client.get(f"{API}/admin/reports/orders").status_code == 403


def test_stats_count_every_status(admin_client, make_order):
    make_order(estado="Pendiente")
    make_order(estado="Pendiente")
    make_order(estado="Entregado")
    make_order(estado="No Encontrado")

    response = admin_client.get(f"{API}/admin/stats")
    assert response.status_code == 200
    body = response.json()
    assert body["total_orders"] == 4

    totals = {row["estado"]: row["total"] for row in body["by_status"]}
    assert totals == {
        "Entregado": 1,
        "En Tránsito": 0,
        "Pendiente": 2,
        "No Encontrado": 1,
        "Cancelado": 0,
    }
    labels = [row["etiqueta"] for row in body["by_status"]]
    assert labels == ["Entregados", "En Tránsito", "Pendientes", "Incidencias", "Cancelados"]


def test_admin_can_override_status(admin_client, make_order, caplog):
    order = make_order(estado="Entregado")

    with caplog.at_level(logging.WARNING, logger="ferrelog.services.order_service"):
        response = admin_client.patch(
            f"{API}/admin/orders/{order.folio}",
            json={"estado": "Pendiente", "costo_de_envio": 80},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["estado"] == "Pendiente"
    assert body["costo_de_envio"] == 80
    assert "Admin override" in caplog.text


def test_admin_can_cancel(admin_client, make_order):
    order = make_order(estado="En Tránsito")
    response = admin_client.patch(
        f"{API}/admin/orders/{order.folio}", json={"estado": "Cancelado"}
    )
    assert response.json()["estado"] == "Cancelado"


def test_admin_update_rejects_unknown_status(admin_client, make_order):
    order = make_order()
    response = admin_client.patch(
        f"{API}/admin/orders/{order.folio}", json={"estado": "Perdido"}
    )
    assert response.status_code == 422


def test_delete_removes_evidence_and_shipment(admin_client, make_order, session):
    order = make_order(estado="No Encontrado")
    folio = order.folio
    session.add(Shipment(folio=folio, unidad="NP300", placas="ABC-1", chofer="Luis"))
    session.add(
        DeliveryEvidence(folio=folio, evidencia_fotografica="data:image/png;base64,AA==", motivo="Cerrado")
    )
    session.commit()

    response = admin_client.delete(f"{API}/admin/orders/{folio}")
    assert response.status_code == 204

    session.expire_all()
    assert session.get(Order, folio) is None
    assert session.exec(select(Shipment).where(Shipment.folio == folio)).all() == []
    assert session.exec(select(DeliveryEvidence).where(DeliveryEvidence.folio == folio)).all() == []


def test_delete_order_without_dependents(admin_client, make_order, session):
    order = make_order()
    folio = order.folio

    assert admin_client.delete(f"{API}/admin/orders/{folio}").status_code == 204
    session.expire_all()
    assert session.get(Order, folio) is None


def test_delete_missing_order_is_404(admin_client):
    response = admin_client.delete(f"{API}/admin/orders/{uuid.uuid4()}")
    assert response.status_code == 404


def test_order_evidence_listing(admin_client, make_order, session):
    order = make_order(estado="No Encontrado")
    session.add(
        DeliveryEvidence(folio=order.folio, evidencia_fotografica="data:image/png;base64,AA==", motivo="Cerrado")
    )
    session.commit()

    response = admin_client.get(f"{API}/admin/orders/{order.folio}/evidence")
    assert response.status_code == 200
    assert [e["motivo"] for e in response.json()] == ["Cerrado"]


def test_orders_report_includes_both_boundary_days(admin_client, make_order):
    make_order(no_tiket="BEFORE", created_at=_utc(2024, 2, 29, 23, 59, 59))
    make_order(no_tiket="FIRST", created_at=_utc(2024, 3, 1, 0, 0, 0))
    make_order(no_tiket="LAST", created_at=_utc(2024, 3, 31, 23, 59, 59))
    make_order(no_tiket="AFTER", created_at=_utc(2024, 4, 1, 0, 0, 0))

    response = admin_client.get(
        f"{API}/admin/reports/orders",
        params={"start_date": "2024-03-01", "end_date": "2024-03-31"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="reporte_orders_2024-03-01.csv"' in response.headers["content-disposition"]

    lines = response.text.strip().split("\n")
    assert lines[0] == "Fecha,Ticket,Cliente,Telefono,Unidades,Estado,Monto"
    assert len(lines) == 3
    assert lines[1].split(",")[1] == "FIRST"
    assert lines[2].split(",")[1] == "LAST"


def test_orders_report_quotes_commas(admin_client, make_order):
    make_order(nombre_cliente="Ana Lopez | Av. Juarez 5, Centro", created_at=_utc(2024, 3, 10, 12, 0))

    response = admin_client.get(
        f"{API}/admin/reports/orders",
        params={"start_date": "2024-03-10", "end_date": "2024-03-10"},
    )
    assert '"Ana Lopez | Av. Juarez 5, Centro"' in response.text


def test_report_rejects_inverted_range(admin_client):
    response = admin_client.get(
        f"{API}/admin/reports/orders",
        params={"start_date": "2024-03-31", "end_date": "2024-03-01"},
    )
    assert response.status_code == 400


def test_report_rejects_unknown_type(admin_client):
    assert admin_client.get(f"{API}/admin/reports/products").status_code == 422


def test_shipments_and_evidence_reports(admin_client, make_order, session):
    order = make_order(estado="No Encontrado")
    session.add(
        Shipment(
            folio=order.folio, unidad="NP300", placas="ABC-1", chofer="Luis",
            created_at=_utc(2024, 5, 2, 9, 0),
        )
    )
    session.add(
        DeliveryEvidence(
            folio=order.folio, evidencia_fotografica="data:image/png;base64,AA==",
            motivo="Cerrado", created_at=_utc(2024, 5, 2, 15, 0),
        )
    )
    session.commit()
    params = {"start_date": "2024-05-01", "end_date": "2024-05-31"}

    shipments = admin_client.get(f"{API}/admin/reports/shipments", params=params)
    lines = shipments.text.strip().split("\n")
    assert lines[0] == "Fecha,Folio,Unidad,Placas,Chofer"
    assert lines[1].endswith(f"{order.folio},NP300,ABC-1,Luis")

    evidence = admin_client.get(f"{API}/admin/reports/evidence", params=params)
    lines = evidence.text.strip().split("\n")
    assert lines[0] == "Fecha,Folio,Motivo"
    assert lines[1].endswith(f"{order.folio},Cerrado")


def test_default_report_range_is_current_month():
    assert default_range(date(2024, 3, 17)) == (date(2024, 3, 1), date(2024, 3, 17))
    assert report_filename("evidence", date(2024, 3, 1)) == "reporte_evidence_2024-03-01.csv"


def test_failed_dependent_delete_keeps_everything(admin_client, make_order, session, monkeypatch):
    order = make_order(estado="No Encontrado")
    folio = order.folio
    session.add(Shipment(folio=folio, unidad="NP300", placas="ABC-1", chofer="Luis"))
    session.add(
        DeliveryEvidence(folio=folio, evidencia_fotografica="data:image/png;base64,AA==", motivo="Cerrado")
    )
    session.commit()

    def fail(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    # Evidence rows are already flushed as deleted when this step fails.
    monkeypatch.setattr(admin_router.shipment_repo, "delete_for_order", fail)

    response = admin_client.delete(f"{API}/admin/orders/{folio}")
    assert response.status_code == 500
    assert response.json()["detail"] == "Error al eliminar el pedido"

    session.expire_all()
    assert session.get(Order, folio) is not None
    assert len(session.exec(select(Shipment).where(Shipment.folio == folio)).all()) == 1
    assert len(session.exec(select(DeliveryEvidence).where(DeliveryEvidence.folio == folio)).all()) == 1

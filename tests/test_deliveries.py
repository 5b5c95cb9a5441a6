import base64
import io

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from starlette.datastructures import Headers

from ferrelog.models.evidence import DeliveryEvidence
from ferrelog.routers import deliveries as deliveries_router
from ferrelog.routers.deliveries import read_photo
from ferrelog.services.delivery_service import MAX_PHOTO_BYTES, encode_photo

API = "/api/v1"

JPEG = b"\xff\xd8\xff\xe0fake-jpeg-bytes"


def _not_found(client, folio, motivo="Nadie atendió", photo=JPEG, content_type="image/jpeg"):
    files = None
    if photo is not None:
        files = {"foto": ("evidencia.jpg", photo, content_type)}
    data = {"motivo": motivo} if motivo is not None else {}
    return client.post(f"{API}/deliveries/{folio}/not-found", data=data, files=files)


def test_mark_delivered(client, make_order):
    order = make_order(estado="En Tránsito")

    response = client.post(f"{API}/deliveries/{order.folio}/delivered")
    assert response.status_code == 200
    body = response.json()
    assert body["order"]["estado"] == "Entregado"
    assert body["evidence"] is None


def test_deliver_pending_order_is_conflict(client, make_order):
    order = make_order()
    response = client.post(f"{API}/deliveries/{order.folio}/delivered")
    assert response.status_code == 409


def test_in_transit_list(client, make_order):
    make_order(no_tiket="P1")
    make_order(no_tiket="T1", estado="En Tránsito")

    response = client.get(f"{API}/deliveries/in-transit")
    assert [o["no_tiket"] for o in response.json()] == ["T1"]


def test_not_found_requires_photo(client, make_order, session):
    order = make_order(estado="En Tránsito")

    response = _not_found(client, order.folio, photo=None)
    assert response.status_code == 400
    assert response.json()["detail"] == "Es necesario adjuntar evidencia fotográfica."

    session.refresh(order)
    assert order.estado == "En Tránsito"
    assert session.exec(select(DeliveryEvidence)).all() == []


def test_not_found_requires_reason(client, make_order):
    order = make_order(estado="En Tránsito")

    response = _not_found(client, order.folio, motivo="   ")
    assert response.status_code == 400
    assert response.json()["detail"] == "Por favor ingrese una observación."


def test_not_found_rejects_unsupported_format(client, make_order):
    order = make_order(estado="En Tránsito")
    response = _not_found(client, order.folio, content_type="application/pdf")
    assert response.status_code == 400


def test_not_found_rejects_oversized_photo(client, make_order):
    order = make_order(estado="En Tránsito")
    response = _not_found(client, order.folio, photo=b"\x00" * (MAX_PHOTO_BYTES + 1))
    assert response.status_code == 413


def test_not_found_from_pending_is_conflict(client, make_order):
    order = make_order()
    response = _not_found(client, order.folio)
    assert response.status_code == 409


def test_not_found_stores_status_and_evidence(client, make_order, session):
    order = make_order(estado="En Tránsito")

    response = _not_found(client, order.folio, motivo="  Domicilio cerrado ")
    assert response.status_code == 200
    body = response.json()
    assert body["order"]["estado"] == "No Encontrado"
    assert body["evidence"]["motivo"] == "Domicilio cerrado"
    assert body["evidence"]["evidencia_fotografica"].startswith("data:image/jpeg;base64,")

    rows = session.exec(
        select(DeliveryEvidence).where(DeliveryEvidence.folio == order.folio)
    ).all()
    assert len(rows) == 1


def test_encode_photo_builds_data_url():
    url = encode_photo("image/png", b"abc")
    assert url == "data:image/png;base64," + base64.b64encode(b"abc").decode()


def test_failed_evidence_insert_keeps_order_in_transit(client, make_order, session, monkeypatch):
    order = make_order(estado="En Tránsito")

    def fail(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(deliveries_router.service.evidence_repo, "create", fail)

    response = _not_found(client, order.folio)
    assert response.status_code == 500
    assert response.json()["detail"] == "Error al reportar incidencia"

    session.refresh(order)
    assert order.estado == "En Tránsito"
    assert session.exec(select(DeliveryEvidence)).all() == []


def test_read_photo_stops_one_byte_past_limit():
    upload = UploadFile(
        file=io.BytesIO(b"\x00" * (MAX_PHOTO_BYTES + 4096)),
        filename="grande.jpg",
        headers=Headers({"content-type": "image/jpeg"}),
    )
    assert len(read_photo(upload)) == MAX_PHOTO_BYTES + 1


def test_read_photo_returns_small_upload_whole():
    upload = UploadFile(file=io.BytesIO(JPEG), filename="foto.jpg")
    assert read_photo(upload) == JPEG

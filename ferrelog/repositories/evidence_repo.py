# ferrelog/repositories/evidence_repo.py
import uuid
from datetime import datetime

from sqlmodel import Session, select

from ferrelog.models.evidence import DeliveryEvidence


class EvidenceRepository:
    """
    Data access layer for the evidencias_entrega table. No commits.
    """

    def list_for_order(
        self,
        session: Session,
        folio: uuid.UUID,
    ) -> list[DeliveryEvidence]:
        stmt = (
            select(DeliveryEvidence)
            .where(DeliveryEvidence.folio == folio)
            .order_by(DeliveryEvidence.created_at)
        )
        return list(session.exec(stmt).all())

    def list_created_between(
        self,
        session: Session,
        start: datetime,
        end: datetime,
    ) -> list[DeliveryEvidence]:
        stmt = (
            select(DeliveryEvidence)
            .where(
                DeliveryEvidence.created_at >= start,
                DeliveryEvidence.created_at <= end,
            )
            .order_by(DeliveryEvidence.created_at)
        )
        return list(session.exec(stmt).all())

    def create(
        self,
        session: Session,
        evidence: DeliveryEvidence,
    ) -> DeliveryEvidence:
        session.add(evidence)
        session.flush()
        session.refresh(evidence)
        return evidence

    def delete_for_order(self, session: Session, folio: uuid.UUID) -> int:
        rows = self.list_for_order(session, folio)
        for row in rows:
            session.delete(row)
        session.flush()
        return len(rows)

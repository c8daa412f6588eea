"""
Repository layer for clients, their SKUs and evidence metadata.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StoreUnavailableError
from app.models.client import Client, Sku, Evidence
from app.schemas.client import SkuCreate, EvidenceCreate

logger = logging.getLogger(__name__)


class ClientRepository:
    """Repository for Client operations"""

    @staticmethod
    def get_or_create(db: Session, code: str, name: str) -> Client:
        """
        Return the client with this code, creating it if absent.

        An existing client is returned unchanged: the name of the first call wins.
        """
        try:
            existing = db.query(Client).filter(Client.code == code).first()
            if existing:
                return existing

            try:
                db.add(Client(code=code, name=name))
                db.commit()
            except IntegrityError:
                # Another request created the same code first
                db.rollback()

            client = db.query(Client).filter(Client.code == code).first()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        logger.info(f"Client {client.id} '{client.code}' ready")
        return client

    @staticmethod
    def get_by_id(db: Session, client_id: int):
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_all(db: Session) -> List[Client]:
        try:
            return db.query(Client).order_by(Client.name).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching clients: {e}")
            return []

    @staticmethod
    def require(db: Session, client_id: int) -> Client:
        client = ClientRepository.get_by_id(db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client


class SkuRepository:
    """Repository for SKU operations"""

    @staticmethod
    def create(db: Session, sku: SkuCreate) -> Sku:
        try:
            ClientRepository.require(db, sku.client_id)

            db_sku = Sku(**sku.model_dump())
            db.add(db_sku)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        db.refresh(db_sku)
        return db_sku

    @staticmethod
    def list_by_client(db: Session, client_id: int) -> List[Sku]:
        """SKUs of a client in display order"""
        try:
            return db.query(Sku).filter(Sku.client_id == client_id).order_by(Sku.order, Sku.id).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching SKUs for client {client_id}: {e}")
            return []

    @staticmethod
    def delete(db: Session, sku_id: int) -> None:
        try:
            db_sku = db.query(Sku).filter(Sku.id == sku_id).first()
            if not db_sku:
                raise NotFoundError("SKU not found")

            db.delete(db_sku)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")


class EvidenceRepository:
    """Repository for evidence metadata (file storage itself is external)"""

    @staticmethod
    def create(db: Session, evidence: EvidenceCreate) -> Evidence:
        try:
            ClientRepository.require(db, evidence.client_id)

            db_evidence = Evidence(**evidence.model_dump())
            db.add(db_evidence)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

        db.refresh(db_evidence)
        return db_evidence

    @staticmethod
    def list_by_client(db: Session, client_id: int) -> List[Evidence]:
        """Evidence of a client, most recent upload first"""
        try:
            return db.query(Evidence).filter(Evidence.client_id == client_id)\
                .order_by(Evidence.uploaded_at.desc(), Evidence.id.desc()).all()
        except OperationalError as e:
            db.rollback()
            logger.error(f"Error fetching evidence for client {client_id}: {e}")
            return []

    @staticmethod
    def delete(db: Session, evidence_id: int) -> None:
        try:
            db_evidence = db.query(Evidence).filter(Evidence.id == evidence_id).first()
            if not db_evidence:
                raise NotFoundError("Evidence not found")

            db.delete(db_evidence)
            db.commit()
        except OperationalError as e:
            db.rollback()
            raise StoreUnavailableError(f"Database not available: {e.orig}")

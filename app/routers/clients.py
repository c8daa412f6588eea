"""
API Router for clients, their SKUs and evidence metadata.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.client_repository import ClientRepository, SkuRepository, EvidenceRepository
from app.schemas.common import SuccessResponse
from app.schemas.client import (
    ClientGetOrCreate,
    ClientResponse,
    ClientGetOrCreateResponse,
    SkuCreate,
    SkuResponse,
    EvidenceCreate,
    EvidenceResponse,
)

router = APIRouter(tags=["Clients"])


# ============================================================================
# CLIENT ENDPOINTS
# ============================================================================

@router.get("/clients/", response_model=List[ClientResponse])
def list_clients(db: Session = Depends(get_db)):
    """
    Get all clients ordered by name.
    """
    return [ClientResponse.model_validate(c) for c in ClientRepository.get_all(db)]


@router.post("/clients/get-or-create", response_model=ClientGetOrCreateResponse)
def get_or_create_client(payload: ClientGetOrCreate, db: Session = Depends(get_db)):
    """
    Return the client with this code, creating it when absent.

    The name is only used on creation.
    """
    client = ClientRepository.get_or_create(db, payload.code, payload.name)
    return ClientGetOrCreateResponse(client=ClientResponse.model_validate(client))


@router.get("/clients/{client_id}/skus", response_model=List[SkuResponse])
def list_client_skus(client_id: int, db: Session = Depends(get_db)):
    """
    Get the SKUs of a client in display order.
    """
    return [SkuResponse.model_validate(s) for s in SkuRepository.list_by_client(db, client_id)]


@router.get("/clients/{client_id}/evidence", response_model=List[EvidenceResponse])
def list_client_evidence(client_id: int, db: Session = Depends(get_db)):
    """
    Get the evidence of a client, most recent first.
    """
    return [EvidenceResponse.model_validate(e) for e in EvidenceRepository.list_by_client(db, client_id)]


# ============================================================================
# SKU ENDPOINTS
# ============================================================================

@router.post("/skus/", response_model=SkuResponse, status_code=status.HTTP_201_CREATED)
def create_sku(sku: SkuCreate, db: Session = Depends(get_db)):
    """
    Add a SKU to a client.
    """
    return SkuResponse.model_validate(SkuRepository.create(db, sku))


@router.delete("/skus/{sku_id}", response_model=SuccessResponse)
def delete_sku(sku_id: int, db: Session = Depends(get_db)):
    SkuRepository.delete(db, sku_id)
    return SuccessResponse(message=f"SKU {sku_id} deleted successfully")


# ============================================================================
# EVIDENCE ENDPOINTS
# ============================================================================

@router.post("/evidence/", response_model=EvidenceResponse, status_code=status.HTTP_201_CREATED)
def upload_evidence(evidence: EvidenceCreate, db: Session = Depends(get_db)):
    """
    Record the metadata of a file already uploaded to storage.
    """
    return EvidenceResponse.model_validate(EvidenceRepository.create(db, evidence))


@router.delete("/evidence/{evidence_id}", response_model=SuccessResponse)
def delete_evidence(evidence_id: int, db: Session = Depends(get_db)):
    EvidenceRepository.delete(db, evidence_id)
    return SuccessResponse(message=f"Evidence {evidence_id} deleted successfully")

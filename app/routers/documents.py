from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import list_filters, require_admin, require_authenticated
from app.schemas.document import DocumentCreate, DocumentResponse, DocumentStatusUpdate, DocumentUpdate
from app.services.document_service import DocumentService
from app.services.filters import FilterSpec

router = APIRouter(prefix="/documents", tags=["documents"])

# File bytes travel through the storage service; only the metadata lives here.


@router.get("")
def list_documents(
    filters: FilterSpec = Depends(list_filters),
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    documents = DocumentService(db, context).list_documents(filters)
    return respond([DocumentResponse.model_validate(d) for d in documents])


@router.post("")
def create_document(
    payload: DocumentCreate,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    document = DocumentService(db, context).create_document(payload)
    return respond(DocumentResponse.model_validate(document), message="Document created", status=201)


@router.get("/{document_id}")
def get_document(
    document_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    document = DocumentService(db, context).get_document(document_id)
    return respond(DocumentResponse.model_validate(document))


@router.patch("/{document_id}")
def update_document(
    document_id: int,
    payload: DocumentUpdate,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    document = DocumentService(db, context).update_document(document_id, payload)
    return respond(DocumentResponse.model_validate(document), message="Document updated")


@router.patch("/{document_id}/status")
def update_document_status(
    document_id: int,
    payload: DocumentStatusUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    document = DocumentService(db, context).update_status(document_id, payload)
    return respond(DocumentResponse.model_validate(document), message="Document status updated")


@router.delete("/{document_id}")
def delete_document(
    document_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    DocumentService(db, context).delete_document(document_id)
    return respond(message="Document deleted")

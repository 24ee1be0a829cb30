from typing import List, Optional

from sqlalchemy.orm import joinedload

from app.models.document import Document
from app.models.employee import Employee
from app.schemas.document import DocumentCreate, DocumentStatusUpdate, DocumentUpdate
from app.services.base import BaseService
from app.services.filters import FilterSpec, filter_records
from app.services.workflow import recognized_changes

DOCUMENT_SEARCH_FIELDS = ("name", "employee.full_name")


class DocumentService(BaseService):

    def list_documents(self, filters: Optional[FilterSpec] = None) -> List[Document]:
        query = (
            self.db.query(Document)
            .join(Employee, Document.employee_id == Employee.id)
            .options(joinedload(Document.employee))
            .filter(Employee.company_id == self.company_id)
        )
        if not self.context.is_admin:
            query = query.filter(Document.employee_id == self.actor_id)
        documents = query.order_by(Document.created_at.desc(), Document.id.desc()).all()
        return filter_records(documents, filters or FilterSpec(), DOCUMENT_SEARCH_FIELDS)

    def get_document(self, document_id: int) -> Document:
        return self.load(Document, document_id, require_owner_field="employee_id")

    def create_document(self, payload: DocumentCreate) -> Document:
        # Target employee must be in the actor's company; non-admins upload for themselves only
        self.load(Employee, payload.employee_id, require_owner_field="id")
        document = Document(**payload.model_dump())
        self.db.add(document)
        self.commit("create document")
        self.db.refresh(document)
        self.log_info("Document created", document_id=document.id, employee_id=document.employee_id)
        return document

    def update_document(self, document_id: int, payload: DocumentUpdate) -> Document:
        document = self.load(Document, document_id, require_owner_field="employee_id")
        changes = recognized_changes(payload, "document", required=("name", "type"))
        for field, value in changes.items():
            setattr(document, field, value)
        self.commit("update document")
        self.db.refresh(document)
        return document

    def update_status(self, document_id: int, payload: DocumentStatusUpdate) -> Document:
        document = self.load(Document, document_id, require_admin=True)
        previous = document.status
        document.status = payload.status.value
        self.commit("update document status")
        self.db.refresh(document)
        self.log_info(
            "Document status changed",
            document_id=document.id,
            from_status=previous,
            to_status=document.status,
        )
        return document

    def delete_document(self, document_id: int) -> None:
        document = self.load(Document, document_id, require_owner_field="employee_id")
        self.db.delete(document)
        self.commit("delete document")
        self.log_info("Document deleted", document_id=document_id)

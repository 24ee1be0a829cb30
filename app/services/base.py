import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InternalError
from app.core.tenancy import TenantContext, load_scoped

M = TypeVar("M")


class BaseService:
    """
    Common plumbing for tenant-scoped services.
    The resolved TenantContext is passed in explicitly; services never re-derive it.
    """

    def __init__(self, db: Session, context: TenantContext):
        self.db = db
        self.context = context
        self._logger = logging.getLogger(self.__class__.__module__)

    @property
    def company_id(self) -> int:
        return self.context.company_id

    @property
    def actor_id(self) -> int:
        return self.context.employee_id

    def load(
        self,
        model: Type[M],
        resource_id: int,
        require_admin: bool = False,
        require_owner_field: Optional[str] = None,
    ) -> M:
        return load_scoped(
            self.db,
            model,
            resource_id,
            self.context,
            require_admin=require_admin,
            require_owner_field=require_owner_field,
        )

    def commit(self, action: str) -> None:
        """Commit the unit of work; on store failure roll everything back and raise InternalError."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self._logger.error(f"Store failure during {action}: {e}", exc_info=True)
            raise InternalError(f"Could not {action}") from e

    @contextmanager
    def unit_of_work(self, action: str) -> Iterator[None]:
        """
        Run several writes as one transaction.
        Any failure inside the block rolls back every step; store errors surface as InternalError.
        """
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self._logger.error(f"Store failure during {action}, all steps rolled back: {e}", exc_info=True)
            raise InternalError(f"Could not {action}") from e
        except Exception:
            self.db.rollback()
            raise

    def upsert_by(self, model: Type[M], lookup: Dict[str, Any], values: Dict[str, Any]) -> Tuple[M, bool]:
        """
        Singular upsert: update the row matching the natural key in `lookup`,
        insert it otherwise. Returns (row, created). Does not commit.
        """
        row = self.db.query(model).filter_by(**lookup).first()
        created = row is None
        if created:
            row = model(**lookup)
            self.db.add(row)
        for field, value in values.items():
            setattr(row, field, value)
        return row, created

    def log_info(self, message: str, **extra: Any) -> None:
        self._logger.info(message, extra={"company_id": self.company_id, "actor_employee_id": self.actor_id, **extra})

    def log_warning(self, message: str, **extra: Any) -> None:
        self._logger.warning(message, extra={"company_id": self.company_id, "actor_employee_id": self.actor_id, **extra})

"""
Authorization Gate.
FastAPI dependencies that turn a bearer credential into a TenantContext and
compose the authenticated / admin / owner-or-admin checks.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.tenancy import TenantContext, resolve_tenant_context
from app.database import get_db
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_credential_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Extracts and validates the credential subject from the bearer token.
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer credential")

    payload = auth_service.decode_access_token(credentials.credentials)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise AuthenticationError()

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise AuthenticationError("TOKEN_EXPIRED")

    if payload.get("type", "access") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise AuthenticationError("Invalid token type")

    subject = payload.get("sub")
    if not subject:
        logger.warning("Authentication failed: Missing subject in token")
        raise AuthenticationError("Missing subject in token")
    return str(subject)


def require_authenticated(
    credential_id: str = Depends(get_credential_id),
    db: Session = Depends(get_db),
) -> TenantContext:
    context = resolve_tenant_context(db, credential_id)
    if context is None:
        logger.warning(f"Authentication failed: credential {credential_id} has no employee")
        raise AuthenticationError("No employee is linked to this credential")
    return context


def require_admin(context: TenantContext = Depends(require_authenticated)) -> TenantContext:
    if not context.is_admin:
        raise AuthorizationError("Only administrators can perform this operation")
    return context


def require_owner_or_admin(context: TenantContext, owner_id: Optional[int]) -> TenantContext:
    """
    Plain helper (not a dependency): the owner id is only known after the
    request body or the target row has been read.
    """
    if context.is_admin or owner_id == context.employee_id:
        return context
    raise AuthorizationError("You can only act on your own records")

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")

class ErrorInfo(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope returned by every endpoint, success or failure."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[ErrorInfo] = None
    status: int = 200

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values. Unset top-level members are omitted."""
        dumped = self.model_dump(mode="json")
        return {k: v for k, v in dumped.items() if v is not None or (k == "data" and self.success)}

    @classmethod
    def ok(cls, data: T = None, message: Optional[str] = None, status: int = 200) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message, status=status)

    @classmethod
    def fail(
        cls,
        message: str,
        code: str = "ERROR",
        status: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> "ApiResponse[T]":
        error = ErrorInfo(code=code, message=message, details=details)
        return cls(success=False, error=error, status=status)


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_jsonable(item) for item in data]
    return data


def respond(
    data: Union[BaseModel, List[BaseModel], Dict[str, Any], None] = None,
    message: Optional[str] = None,
    status: int = 200,
) -> JSONResponse:
    """Wrap a handler result in the success envelope."""
    body = ApiResponse[Any].ok(_jsonable(data), message=message, status=status)
    return JSONResponse(status_code=status, content=body.to_dict())


def fail_response(
    message: str,
    code: str,
    status: int,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ApiResponse[Any].fail(message, code=code, status=status, details=details)
    return JSONResponse(status_code=status, content=body.to_dict(), headers=headers)

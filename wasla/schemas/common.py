"""
Wasla - Common schemas
Paging envelope of the subscriber list, plain message replies and the
partial-update helper shared by every PUT/PATCH endpoint.
"""
from fastapi import HTTPException, status
from pydantic import BaseModel
from typing import Any, Dict, Generic, TypeVar, List, Optional

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    per_page: int
    pages: int


class MessageResponse(BaseModel):
    message: str
    detail: Optional[str] = None


def update_values(data: BaseModel, *nullable: str) -> Dict[str, Any]:
    """
    Fields the client actually sent in a partial update.
    An explicit null clears the columns listed in `nullable`; on any other
    field it is refused with 422.
    """
    values = data.model_dump(exclude_unset=True)
    refused = sorted(k for k, v in values.items() if v is None and k not in nullable)
    if refused:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"لا يمكن ترك هذه الحقول فارغة: {', '.join(refused)}",
        )
    return values

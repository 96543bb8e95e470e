"""
Shared Pydantic building blocks for request and response schemas.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case attributes, camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""
    success: bool = False
    message: str
    errors: Optional[List[Dict[str, Any]]] = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str

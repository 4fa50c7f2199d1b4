from typing import Any, List

from pydantic import BaseModel, Field


class SimplifyRequest(BaseModel):
    # Untyped so missing or non-string text reaches the route and gets the same 400 as blank text.
    text: Any = None


class SimplificationResult(BaseModel):
    summary: str
    pros: List[str] = Field(default_factory=list, max_length=3)
    cons: List[str] = Field(default_factory=list, max_length=3)


class ExtractTextResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str


class ClientConfig(BaseModel):
    max_upload_bytes: int
    allowed_mime_types: List[str]

"""
Pydantic models for the desktop automation server.

Request and response payloads exchanged with the remote automation server.
"""

from typing import Dict, Any, Optional, List

from pydantic import BaseModel, Field, validator, ConfigDict


class SelectorChainRequest(BaseModel):
    """Request body addressing an element through a chain of selectors."""

    model_config = ConfigDict(extra="forbid")

    selector_chain: List[str] = Field(..., description="Selectors, outermost first")

    @validator("selector_chain")
    def validate_selector_chain(cls, v):
        if not v:
            raise ValueError("Selector chain cannot be empty")
        return v


class ElementText(BaseModel):
    """Text payload returned for an element."""

    model_config = ConfigDict(extra="ignore")

    text: str = Field("", description="Text content of the element")

    @validator("text", pre=True)
    def coerce_missing_text(cls, v):
        return "" if v is None else v


class VisibilityResponse(BaseModel):
    """Visibility check result for an element."""

    model_config = ConfigDict(extra="ignore")

    result: bool = Field(..., description="Whether the element is visible")


class ApiErrorResponse(BaseModel):
    """Error body returned by the server on non-success status codes."""

    model_config = ConfigDict(extra="ignore")

    message: Optional[str] = Field(None, description="Error message")
    error: Optional[str] = Field(None, description="Alternate error field")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra error details")

    @property
    def detail_message(self) -> Optional[str]:
        return self.message or self.error

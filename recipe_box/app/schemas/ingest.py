from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: Optional[str] = None
    text: Optional[str] = None
    userId: Optional[str] = None


class RecipeDraft(BaseModel):
    name: str
    ingredients: str
    instructions: str


class BatchSummaryData(BaseModel):
    message: str
    total: int
    success: int
    errors: int


class RecipeClassificationResponse(BaseModel):
    type: Literal["recipe"] = "recipe"
    data: dict[str, Any]


class SummaryResponse(BaseModel):
    type: Literal["summary"] = "summary"
    data: BatchSummaryData


class ErrorResponse(BaseModel):
    error: str

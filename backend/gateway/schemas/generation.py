# gateway/schemas/generation.py
"""
Pydantic schemas for generation endpoints.
"""
from typing import Any

from pydantic import BaseModel, Field


class GenerateIn(BaseModel):
    """
    Metered generation: cost = ceil(tokensUsed / 100) * model rate.
    """
    modelName: str = Field(min_length=1)
    tokensUsed: int = Field(ge=0)


class GenerateOut(BaseModel):
    message: str
    cost: int


class GenerateTextIn(BaseModel):
    """
    Flat-rate generation proxied to the upstream provider.
    """
    prompt: str = Field(min_length=1)
    modelName: str = "gpt-4"


class GenerateTextOut(BaseModel):
    generatedText: Any  # Raw provider response body

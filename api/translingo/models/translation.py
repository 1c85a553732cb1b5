"""Wire models for translation, detection and history.

Field names are snake_case in Python and camelCase on the wire, matching the
browser client's JSON contract.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TranslationType = Literal["text", "voice", "ocr"]

AUTO_LANGUAGE = "auto"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranslateRequest(CamelModel):
    """Inbound body of POST /api/translate.

    Required fields are optional here so that a missing value is reported as
    a 400 by the resolver instead of a schema error.
    """

    text: Optional[str] = Field(None, description="Text to translate")
    target_language: Optional[str] = Field(None, description="Target language code")
    source_language: Optional[str] = Field(
        None, description="Source language code or 'auto'"
    )


class TranslationResult(CamelModel):
    """Canonical translation result, whichever provider produced it."""

    translated_text: str
    source_language: str
    target_language: str
    confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("source_language")
    @classmethod
    def resolve_auto(cls, v: str) -> str:
        """A reported source language is never the 'auto' sentinel."""
        v = (v or "").strip()
        if not v or v == AUTO_LANGUAGE:
            return "en"
        return v


class DetectLanguageRequest(BaseModel):
    text: Optional[str] = None


class LanguageDetection(BaseModel):
    language: str
    confidence: float = 0.0
    is_reliable: bool = Field(False, alias="isReliable")

    model_config = ConfigDict(populate_by_name=True)


class TranslationCreate(CamelModel):
    """Body of POST /api/translations."""

    source_text: str = Field(min_length=1, max_length=5000)
    translated_text: str = Field(max_length=20000)
    source_language: str = Field(min_length=1, max_length=16)
    target_language: str = Field(min_length=1, max_length=16)
    type: TranslationType = "text"
    is_favorite: bool = False
    metadata: Optional[Dict[str, Any]] = None


class TranslationUpdate(CamelModel):
    """Body of PATCH /api/translations/{id}; only provided fields change."""

    source_text: Optional[str] = Field(None, min_length=1, max_length=5000)
    translated_text: Optional[str] = Field(None, max_length=20000)
    source_language: Optional[str] = Field(None, min_length=1, max_length=16)
    target_language: Optional[str] = Field(None, min_length=1, max_length=16)
    type: Optional[TranslationType] = None
    is_favorite: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


class TranslationHistoryEntry(TranslationCreate):
    """A stored translation."""

    id: int
    created_at: datetime

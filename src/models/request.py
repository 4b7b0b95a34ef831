from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FIRTextRequest(BaseModel):
    """Body of every ``/analyze`` endpoint.

    Length limits come from settings and are checked by the route so
    that they surface as input errors with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True)

    fir_text: str = Field(
        ...,
        alias="firText",
        description="Free-form FIR narrative, English with optional Telugu",
    )


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(alias="isValid")
    issues: list[str] = Field(default_factory=list)


class KeywordsResponse(BaseModel):
    keywords: list[str]

from pydantic import BaseModel, ConfigDict, field_validator


class ChatIn(BaseModel):
    message: str

    @field_validator("message", mode="before")
    @classmethod
    def _non_empty(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Message is required")
        return v


class SourceMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    source: str | None = None
    page: int | str | None = None


class Source(BaseModel):
    # extra columns returned by match_documents are passed through untouched
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    content: str = ""
    similarity: float = 0.0
    metadata: SourceMetadata = SourceMetadata()

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_or_empty(cls, v):
        return v if v is not None else {}

    # null columns fall back to the field defaults
    @field_validator("content", mode="before")
    @classmethod
    def _content_or_empty(cls, v):
        return v if v is not None else ""

    @field_validator("similarity", mode="before")
    @classmethod
    def _similarity_or_zero(cls, v):
        return v if v is not None else 0.0


class ChatOut(BaseModel):
    answer: str
    sources: list[Source]


class ErrorOut(BaseModel):
    error: str

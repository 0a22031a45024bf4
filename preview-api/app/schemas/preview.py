from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PreviewData(BaseModel):
    """Link-preview metadata for one source URL.

    Every field is ``None`` when it was not found or the page could not be
    fetched; the two cases are not distinguished.
    """

    image: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = Field(default=None, alias="siteName")
    favicon: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def empty(cls) -> "PreviewData":
        return cls()


class ErrorResponse(BaseModel):
    error: str

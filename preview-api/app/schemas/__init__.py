from app.schemas.preview import ErrorResponse, PreviewData

__all__ = [
    "ErrorResponse",
    "PreviewData",
]

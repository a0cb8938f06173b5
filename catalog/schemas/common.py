from pydantic import BaseModel


def strip_text(v):
    """Trim surrounding whitespace; emptiness is checked by the services"""
    if isinstance(v, str):
        return v.strip()
    return v


class DeleteResponse(BaseModel):
    """Response for soft-delete operations"""

    success: bool = True
    message: str

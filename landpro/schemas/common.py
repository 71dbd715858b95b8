# File: landpro/schemas/common.py

from pydantic import BaseModel


class VersionedRequest(BaseModel):
    """Body of an action that changes a row without editing its fields."""

    version: int

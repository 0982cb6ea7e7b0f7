"""Repository snapshot models."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel


class RepositoryInfo(BaseModel):
    """Point-in-time description of an installed repository."""

    name: str
    path: Path
    url: str | None = None
    last_updated_at: datetime | None = None

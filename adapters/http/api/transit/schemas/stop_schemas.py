"""Stop and line response schemas."""

from typing import List
from pydantic import BaseModel


class StopResponse(BaseModel):
    id: int
    name: str
    lat: float
    lon: float
    lines: List[str] = []


class LineResponse(BaseModel):
    id: str
    stops: List[int]
    duration_minutes: float
    segment_minutes: float

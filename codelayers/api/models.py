"""
Pydantic models for API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Tuple


class LoadLayerRequest(BaseModel):
    path: str = Field(..., description="Layer file inside the layer directory, absolute or relative to it")
    name: Optional[str] = Field(default=None, description="Layer name, defaults to the file stem")
    active: bool = Field(default=True, description="Show the layer right away")


class ActiveRequest(BaseModel):
    active: bool = Field(..., description="New active flag")


class LayerSummary(BaseModel):
    name: str
    active: bool
    files: int
    kinds: Dict[str, str]
    stats: Dict[str, int]


class LayerListResponse(BaseModel):
    root: str
    layers: List[LayerSummary]
    unresolved_kinds: List[str] = Field(default_factory=list)


class StatsResponse(BaseModel):
    name: str
    stats: Dict[str, int]
    files_per_kind: Dict[str, int]


class MicroResponse(BaseModel):
    file: str
    lines: Dict[int, List[str]]


class MacroResponse(BaseModel):
    file: str
    macro: List[Tuple[float, str]]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    layers_loaded: int
    message: Optional[str] = None

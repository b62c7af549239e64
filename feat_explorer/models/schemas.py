"""
Pydantic models for API request/response schemas.

- Strongly-typed response models (avoid plain dicts)
- Use Field default_factory for mutable defaults
- Provide JSON Schema examples via model_config
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Union

FeatId = Union[int, str]


class TierDescription(BaseModel):
    """Rules text of one tier of a feat."""
    tier: str
    description: str


class FeatCard(BaseModel):
    """One result card."""
    id: FeatId
    name: str
    meta: List[str] = Field(default_factory=list)
    meta_line: str = ""
    tiers: List[TierDescription] = Field(default_factory=list)
    matching_tiers: List[TierDescription] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class ActiveFilterItem(BaseModel):
    """A removable indicator for one active selection."""
    facet: str
    value: FeatId
    label: str


class FeatsResponse(BaseModel):
    """Current result set."""
    count: int
    results: List[FeatCard] = Field(default_factory=list)
    selected_tiers: List[str] = Field(default_factory=list)
    active_filters: List[ActiveFilterItem] = Field(default_factory=list)
    message: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "count": 1,
                    "results": [
                        {
                            "id": 1,
                            "name": "Cleave",
                            "meta": ["Fighter Talent"],
                            "meta_line": "Fighter Talent",
                            "tiers": [{"tier": "Epic", "description": "Extra attack."}],
                            "matching_tiers": [{"tier": "Epic", "description": "Extra attack."}],
                            "tags": ["Melee"],
                        }
                    ],
                    "selected_tiers": ["Epic"],
                    "active_filters": [
                        {"facet": "Class", "value": "Fighter", "label": "Class: Fighter"},
                        {"facet": "Tier", "value": "Epic", "label": "Tier: Epic"},
                    ],
                    "message": None,
                }
            ]
        }
    )


class FacetsResponse(BaseModel):
    """Options offered for each sidebar facet."""
    facets: dict = Field(default_factory=dict)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "facets": {
                        "Type": ["Ancestry", "Class", "General"],
                        "Ancestry": ["Dwarf", "Elf"],
                        "Class": ["Fighter", "Wizard"],
                        "Tier": ["Adventurer", "Champion", "Epic"],
                    }
                }
            ]
        }
    )


class ToggleFilterRequest(BaseModel):
    """Select, deselect or flip one sidebar value."""
    facet: str
    value: str
    selected: Optional[bool] = None

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"facet": "Class", "value": "Fighter", "selected": True}]}
    )


class RemoveFilterRequest(BaseModel):
    """Remove one active filter."""
    facet: str
    value: FeatId


class PanelControlRequest(BaseModel):
    """Set or flip one advanced panel control."""
    key: FeatId
    checked: Optional[bool] = None


class PanelFeatOption(BaseModel):
    id: FeatId
    name: str
    checked: bool = False


class PanelCluster(BaseModel):
    parent_trait: str
    checked: bool = False
    feats: List[PanelFeatOption] = Field(default_factory=list)


class PanelGroup(BaseModel):
    name: str
    standalone: List[PanelFeatOption] = Field(default_factory=list)
    clusters: List[PanelCluster] = Field(default_factory=list)


class PanelPartition(BaseModel):
    kind: str
    groups: List[PanelGroup] = Field(default_factory=list)


class PanelLevel(BaseModel):
    value: str
    available: bool
    checked: bool = False


class AdvancedPanelResponse(BaseModel):
    """Advanced panel structure, optionally with checkbox state."""
    scope_size: int
    partitions: List[PanelPartition] = Field(default_factory=list)
    spell_levels: List[PanelLevel] = Field(default_factory=list)
    feature_levels: List[PanelLevel] = Field(default_factory=list)


class StatusResponse(BaseModel):
    """Response model for system status."""
    status: str
    catalog_loaded: bool
    feat_count: int
    result_count: Optional[int] = None
    error: Optional[dict] = None


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str


class ErrorResponse(BaseModel):
    """Standard error response model (for HTTPException bodies)."""
    detail: Union[str, dict]

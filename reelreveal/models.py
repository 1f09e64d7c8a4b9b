from __future__ import annotations
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class InsightRequest(BaseModel):
    """
    Film description sent by the SPA to ask for generated insights.
    Only `title` is required; it is checked by the service so that a missing
    title is reported as a bad request instead of a schema error.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    year: Optional[Union[int, str]] = None
    director: Optional[str] = None
    main_cast: Optional[List[str]] = Field(default=None, alias="mainCast")
    overview: Optional[str] = None
    budget: Optional[float] = None
    revenue: Optional[float] = None
    runtime: Optional[int] = None
    type: Optional[str] = "standard"  # standard | extended

    @property
    def is_extended(self) -> bool:
        return self.type == "extended"

class InsightResponse(BaseModel):
    """
    Paragraph-spaced insights text.
    """
    insights: str
    success: bool = True

    model_config = ConfigDict(json_schema_extra={
        "examples": [{
            "insights": "Filming took place over 18 months.\n\nThe score was recorded in a single session.",
            "success": True,
        }]
    })

class HealthResponse(BaseModel):
    message: str

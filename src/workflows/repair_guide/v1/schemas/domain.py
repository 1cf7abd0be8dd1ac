from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, Field


NO_OVERVIEW = "No overview available"
NOT_AVAILABLE = "N/A"


class RepairGuide(BaseModel):
    overview: str = NO_OVERVIEW
    diagnostic_steps: List[str] = Field(default_factory=list)
    repair_steps: List[str] = Field(default_factory=list)
    tools_needed: List[str] = Field(default_factory=list)
    time_estimate: str = NOT_AVAILABLE
    cost_estimate: str = NOT_AVAILABLE
    # Filled in by the caller after normalization, never from model output.
    parts: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)

    def with_links(
        self, parts: Iterable[object] = (), videos: Iterable[object] = ()
    ) -> "RepairGuide":
        return self.model_copy(
            update={
                "parts": [str(item) for item in parts],
                "videos": [str(item) for item in videos],
            }
        )

"""
Data models for frame-scoped waiting.

This module defines the Pydantic models passed between the waiter and the
pipeline:
- FrameContext: Metadata for one enumerated frame
- ProbeResult: Outcome of checking a single frame once
- WaitOutcome: The frame and element a successful wait selected
- StageReport / PipelineReport: Summary of a pipeline run
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FrameContext(BaseModel):
    """Frame metadata captured when frames are enumerated.

    Validation Rules:
    - index must be >= 0
    - parent_index is None for the main frame
    """

    index: int = Field(ge=0, description="Position in the enumerated frame list (0 = main)")
    """Position in the enumerated frame list. 0 is the main frame."""

    name: Optional[str] = None
    """Frame name attribute (if present)."""

    src: Optional[str] = None
    """Frame URL at enumeration time."""

    parent_index: Optional[int] = None
    """Index of the parent frame (for nested frames)."""

    @property
    def label(self) -> str:
        """Short label for log lines."""
        if self.name:
            return f"{self.index}:{self.name}"
        return str(self.index)


class ProbeStatus(str, Enum):
    """Result of probing one frame for a predicate."""

    MATCH = "match"
    NO_MATCH = "no_match"
    INACCESSIBLE = "inaccessible"


class ProbeResult(BaseModel):
    """Outcome of a single predicate probe against a single frame.

    Validation Rules:
    - element is set only when status is MATCH
    - reason is set only when status is INACCESSIBLE
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: ProbeStatus
    element: Optional[Any] = None
    """Playwright ElementHandle for the match (stored as Any)."""

    reason: Optional[str] = None

    @classmethod
    def match(cls, element: Any) -> "ProbeResult":
        return cls(status=ProbeStatus.MATCH, element=element)

    @classmethod
    def no_match(cls) -> "ProbeResult":
        return cls(status=ProbeStatus.NO_MATCH)

    @classmethod
    def inaccessible(cls, reason: str) -> "ProbeResult":
        return cls(status=ProbeStatus.INACCESSIBLE, reason=reason)

    @property
    def matched(self) -> bool:
        return self.status is ProbeStatus.MATCH


class WaitOutcome(BaseModel):
    """Frame and element selected by a successful wait.

    frame and element hold Playwright objects (stored as Any to avoid
    Pydantic issues).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    frame: Any
    element: Any
    frame_context: FrameContext
    predicate_description: str
    polls: int = Field(ge=1, description="Poll rounds run, including the successful one")
    elapsed_ms: int = Field(ge=0)


class StageReport(BaseModel):
    """Result of one pipeline stage."""

    name: str
    success: bool
    frame_context: Optional[FrameContext] = None
    elapsed_ms: int = Field(ge=0, default=0)
    error: Optional[str] = None


class PipelineReport(BaseModel):
    """Result of a full pipeline run.

    failed_stage is None when every stage completed.
    """

    frame_count: int = Field(ge=0)
    stages: list[StageReport] = []
    failed_stage: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.failed_stage is None and all(stage.success for stage in self.stages)

    def to_summary(self) -> dict:
        """Plain dict used for the final console panel."""
        return {
            "frames": self.frame_count,
            "stages": [
                {
                    "name": stage.name,
                    "success": stage.success,
                    "frame": stage.frame_context.label if stage.frame_context else None,
                    "elapsed_ms": stage.elapsed_ms,
                    "error": stage.error,
                }
                for stage in self.stages
            ],
            "completed": self.completed,
        }

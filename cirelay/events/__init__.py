"""Pipeline run event extraction, normalization and dispatch."""

from __future__ import annotations

from .denylist import RepositoryDenylist, is_repository_denied
from .extraction import RawRunFields, RunFieldExtractor
from .models import CanonicalRunEvent
from .observability import PipelineEventLogger, PipelineEventType
from .pipeline import DispatchStatus, PipelineOutcome, RunEventPipeline
from .status import PipelineStatus, map_outcome

__all__ = [
    "CanonicalRunEvent",
    "DispatchStatus",
    "PipelineEventLogger",
    "PipelineEventType",
    "PipelineOutcome",
    "PipelineStatus",
    "RawRunFields",
    "RepositoryDenylist",
    "RunEventPipeline",
    "RunFieldExtractor",
    "is_repository_denied",
    "map_outcome",
]

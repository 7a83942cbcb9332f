"""Data models for a digest run."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from publish_digest.models import PublishAttempt


class RunStage(str, Enum):
    FETCHED = "fetched"
    CLASSIFIED = "classified"
    SUMMARIZED = "summarized"
    ASSEMBLED = "assembled"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    FAILED = "failed"


# Stage -> stages it may move to
TRANSITIONS = {
    None: {RunStage.FETCHED, RunStage.FAILED},
    RunStage.FETCHED: {RunStage.CLASSIFIED, RunStage.FAILED},
    RunStage.CLASSIFIED: {RunStage.SUMMARIZED, RunStage.FAILED},
    RunStage.SUMMARIZED: {RunStage.ASSEMBLED, RunStage.FAILED},
    RunStage.ASSEMBLED: {RunStage.PUBLISHED},
    RunStage.PUBLISHED: {RunStage.ARCHIVED},
    RunStage.ARCHIVED: set(),
    RunStage.FAILED: set(),
}


@dataclass
class RunReport:
    """Record of one digest run, written to the output directory as JSONL."""
    profile: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None
    stage: Optional[RunStage] = None
    stages: list[RunStage] = field(default_factory=list)
    failed_stage: Optional[RunStage] = None
    error: Optional[str] = None
    document_location: str = ""
    summarized: int = 0
    failed_articles: list[str] = field(default_factory=list)
    publish_attempts: list[PublishAttempt] = field(default_factory=list)
    archived: int = 0

    def advance(self, stage: RunStage) -> None:
        if stage not in TRANSITIONS[self.stage]:
            raise ValueError(f"Invalid run transition: {self.stage} -> {stage}")
        self.stage = stage
        self.stages.append(stage)

    def fail(self, error: Exception) -> None:
        """Mark the run failed at its current stage."""
        failed_at = self.stage
        self.advance(RunStage.FAILED)
        self.failed_stage = failed_at
        self.error = str(error)

    def finish(self) -> None:
        self.finished_at = datetime.now(timezone.utc)

    @property
    def succeeded(self) -> bool:
        return self.stage != RunStage.FAILED

"""
Pydantic v2 models shared by the transcription pipeline.

Nothing here is persisted; every instance lives for one job at most.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Document coordinates
# ---------------------------------------------------------------------------


class Position(BaseModel):
    """A (line, column) coordinate in the editor's text model."""

    line: int = 0
    ch: int = 0


# ---------------------------------------------------------------------------
# Upload payload
# ---------------------------------------------------------------------------


class AudioUpload(BaseModel):
    """Raw audio bytes packaged for the ``audio_file`` multipart field."""

    filename: str
    content: bytes
    media_type: str = "audio/mp3"


# ---------------------------------------------------------------------------
# Job
# ---------------------------------------------------------------------------


class JobStage(StrEnum):
    """Lifecycle stages of one transcription job."""

    idle = "idle"
    checking_availability = "checking_availability"
    transcribing = "transcribing"
    post_processing = "post_processing"
    done = "done"
    failed = "failed"


class FailureReason(StrEnum):
    """Why a job ended in ``failed``."""

    service_unavailable = "service unavailable"
    transcription_error = "transcription error"


_TRANSITIONS: dict[JobStage, set[JobStage]] = {
    JobStage.idle: {JobStage.checking_availability, JobStage.failed},
    JobStage.checking_availability: {JobStage.transcribing, JobStage.failed},
    JobStage.transcribing: {JobStage.post_processing, JobStage.done, JobStage.failed},
    JobStage.post_processing: {JobStage.done, JobStage.failed},
    JobStage.done: set(),
    JobStage.failed: set(),
}


class TranscriptionJob(BaseModel):
    """State of one activation of a transcribe control.

    ``advance`` enforces the stage graph so a job can never skip the
    availability check or leave a terminal state.
    """

    source: str
    file_name: str
    stage: JobStage = JobStage.idle
    text: str = ""
    reason: FailureReason | None = None
    error: str | None = None
    history: list[JobStage] = Field(default_factory=lambda: [JobStage.idle])

    @property
    def is_terminal(self) -> bool:
        return self.stage in (JobStage.done, JobStage.failed)

    def advance(self, stage: JobStage) -> None:
        """Move to ``stage``.

        Raises:
            ValueError: If the transition is not allowed from the current stage.
        """
        if stage not in _TRANSITIONS[self.stage]:
            raise ValueError(f"Illegal job transition: {self.stage} -> {stage}")
        self.stage = stage
        self.history.append(stage)

    def fail(self, reason: FailureReason, detail: str) -> None:
        """Mark the job failed with a reason and error detail."""
        self.advance(JobStage.failed)
        self.reason = reason
        self.error = detail

"""
Embedding job stage state machine.

Selecting → BuildingMatrix → EmbeddingRelation → Complete. Failed is
reachable from any non-terminal stage but is only written when the
dispatcher is configured to record failures.

Dependencies: None (pure domain layer)
System role: Legal progress stages and transition rules for embedding jobs
"""

import enum


class JobStage(str, enum.Enum):
    """
    Progress stages of an embedding job, stored as text in the jobs table.

    SELECTING: Job accepted; recipes being pulled for the requested tag
    BUILDING_MATRIX: Recipes selected; co-occurrence matrix under construction
    EMBEDDING_RELATION: Matrix built; embedding placeholder stage
    COMPLETE: Pipeline finished
    FAILED: Pipeline stopped; written only with record_failures enabled
    """

    SELECTING = "Selecting"
    BUILDING_MATRIX = "BuildingMatrix"
    EMBEDDING_RELATION = "EmbeddingRelation"
    COMPLETE = "Complete"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStage.COMPLETE, JobStage.FAILED)

    @property
    def order(self) -> int:
        """Position in the pipeline order; Failed sorts after every stage."""
        return _ORDER.index(self)

    def next_stage(self) -> "JobStage | None":
        """Return the pipeline successor, or None for terminal stages."""
        if self.is_terminal:
            return None
        return PIPELINE_ORDER[PIPELINE_ORDER.index(self) + 1]

    def can_transition_to(self, target: "JobStage") -> bool:
        """
        Check whether a status write from this stage to target is legal.

        Only the immediate successor is allowed, plus Failed from any
        non-terminal stage.

        Args:
            target: Stage about to be written

        Returns:
            bool: True when the write keeps the job moving forward
        """
        if self.is_terminal:
            return False
        if target is JobStage.FAILED:
            return True
        return self.next_stage() is target


PIPELINE_ORDER: tuple[JobStage, ...] = (
    JobStage.SELECTING,
    JobStage.BUILDING_MATRIX,
    JobStage.EMBEDDING_RELATION,
    JobStage.COMPLETE,
)

_ORDER: tuple[JobStage, ...] = PIPELINE_ORDER + (JobStage.FAILED,)

INITIAL_STAGE = JobStage.SELECTING

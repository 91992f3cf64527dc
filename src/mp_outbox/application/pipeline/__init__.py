"""Application pipeline – stages, outcomes and the pipeline runner."""
from mp_outbox.application.pipeline.pipeline import Handler, Pipeline
from mp_outbox.application.pipeline.stage import Continue, Stage, StageResult, Stop
from mp_outbox.application.pipeline.stages import (
    DeduplicationStage,
    MessageIdStage,
    MessageNameStage,
    PartitionKeyResolver,
    PartitionKeyStage,
)

__all__ = [
    "Continue",
    "DeduplicationStage",
    "Handler",
    "MessageIdStage",
    "MessageNameStage",
    "PartitionKeyResolver",
    "PartitionKeyStage",
    "Pipeline",
    "Stage",
    "StageResult",
    "Stop",
]

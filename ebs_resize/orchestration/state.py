"""
EBS Resize - Workflow State Tracking

Tracks where a resize run is in its linear state machine and what each
stage reported, so a failed run says exactly how far it got.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ebs_resize.core.exceptions import VolumeResizeError
from ebs_resize.core.models import WorkflowContext
from ebs_resize.utils.logger import log_state_change


class WorkflowState(Enum):
    """States of a resize run. Linear; any stage may jump to FAILED."""
    PENDING = 'PENDING'
    VALIDATING = 'VALIDATING'
    DETACHING = 'DETACHING'
    SNAPSHOTTING = 'SNAPSHOTTING'
    RECREATING = 'RECREATING'
    ATTACHING = 'ATTACHING'
    SUCCEEDED = 'SUCCEEDED'
    VALIDATED = 'VALIDATED'  # dry run stops here
    FAILED = 'FAILED'

    @property
    def is_terminal(self) -> bool:
        return self in (WorkflowState.SUCCEEDED, WorkflowState.VALIDATED, WorkflowState.FAILED)


@dataclass
class StageRecord:
    """
    One entry in the run history.

    Tracks the state entered and, once the stage ends, how it ended.
    """
    state: WorkflowState
    success: Optional[bool] = None
    message: str = ''
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class StateTracker:
    """
    Tracks the state of a resize run.

    Example:
        tracker = StateTracker()

        tracker.transition(WorkflowState.DETACHING)
        tracker.complete(True, "Volume detached")
        tracker.transition(WorkflowState.SNAPSHOTTING)
        tracker.complete(False, "Timed out")
        tracker.transition(WorkflowState.FAILED)

        print(tracker.get_summary())
    """

    def __init__(self, logger=None):
        """Initialize empty state tracker."""
        self.state = WorkflowState.PENDING
        self.history: List[StageRecord] = []
        self.workflow_start_time = datetime.now()
        self.logger = logger

    def transition(self, new_state: WorkflowState):
        """
        Enter a new state.

        Raises:
            RuntimeError: If the run already reached a terminal state
        """
        if self.state.is_terminal:
            raise RuntimeError(f"Cannot leave terminal state {self.state.value}")

        if self.logger:
            log_state_change(self.logger, "Workflow", self.state.value, new_state.value)

        self.state = new_state
        self.history.append(StageRecord(state=new_state))

    def complete(self, success: bool, message: str):
        """Record how the current stage ended."""
        if self.history:
            record = self.history[-1]
            record.success = success
            record.message = message

    def get_completed_stages(self) -> List[StageRecord]:
        """Get stages that finished successfully."""
        return [r for r in self.history if r.success]

    def get_summary(self) -> str:
        """Get summary of the run."""
        stages = [r for r in self.history if r.success is not None]
        succeeded = len(self.get_completed_stages())
        duration = (datetime.now() - self.workflow_start_time).total_seconds()

        summary = f"Stages: {succeeded}/{len(stages)} succeeded"
        summary += f", final state {self.state.value}"
        summary += f" (took {duration:.1f}s)"

        return summary


@dataclass
class ResizeOutcome:
    """
    Terminal result of a resize run.

    Attributes:
        state: SUCCEEDED, VALIDATED (dry run) or FAILED
        context: Last context reached (the full one on success)
        error: First error encountered, if any
        history: Stage records from the tracker
    """
    state: WorkflowState
    context: WorkflowContext
    error: Optional[VolumeResizeError] = None
    history: List[StageRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.state in (WorkflowState.SUCCEEDED, WorkflowState.VALIDATED)

    @property
    def new_volume_id(self) -> Optional[str]:
        if self.context.new_volume is None:
            return None
        return self.context.new_volume.volume_id

    def to_dict(self) -> dict:
        """Flatten to a dict for output formatting."""
        data = {'status': self.state.value}
        data.update(self.context.to_dict())
        if self.error is not None:
            data['error'] = str(self.error)
        return data

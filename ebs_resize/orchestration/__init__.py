"""
EBS Resize - Orchestration Module

Coordinates the resize workflow.
"""

from ebs_resize.orchestration.resize import ResizeOrchestrator
from ebs_resize.orchestration.state import ResizeOutcome, StageRecord, StateTracker, WorkflowState

__all__ = [
    'ResizeOrchestrator',
    'ResizeOutcome',
    'StageRecord',
    'StateTracker',
    'WorkflowState'
]

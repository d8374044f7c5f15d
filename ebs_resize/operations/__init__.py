"""
EBS Resize - Operations Module

This module provides the workflow stages and the poll engine they share.
Each operation issues one mutating cloud call and waits for the remote
state to settle.

Usage:
    from ebs_resize.operations import DetachVolumeOperation

    operation = DetachVolumeOperation(adapter, config, logger)
    result = await operation.execute(context)

    if result.success:
        context = result.context
    else:
        raise result.error
"""

from ebs_resize.operations.base import BaseOperation, OperationResult
from ebs_resize.operations.polling import PollResult, poll_until
from ebs_resize.operations.detach_volume import DetachVolumeOperation
from ebs_resize.operations.create_snapshot import CreateSnapshotOperation
from ebs_resize.operations.create_volume import CreateVolumeOperation
from ebs_resize.operations.attach_volume import AttachVolumeOperation

__all__ = [
    # Base classes
    'BaseOperation',
    'OperationResult',

    # Poll engine
    'PollResult',
    'poll_until',

    # Operations
    'DetachVolumeOperation',
    'CreateSnapshotOperation',
    'CreateVolumeOperation',
    'AttachVolumeOperation',
]

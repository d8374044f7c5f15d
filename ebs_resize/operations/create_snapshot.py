"""
EBS Resize - Create Snapshot Operation

Snapshots the detached source volume and waits for the copy to complete.
This is the slowest stage: the whole volume is copied.
"""

from dataclasses import replace

from ebs_resize.core.exceptions import OperationFailedError
from ebs_resize.core.models import SnapshotState
from ebs_resize.operations.base import BaseOperation
from ebs_resize.operations.polling import PollResult


class CreateSnapshotOperation(BaseOperation):
    """
    Creates a snapshot of the source volume.

    The snapshot is left in place after the run; it is the operator's
    copy of the original data.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Create Snapshot"

    def _description(self, context) -> str:
        """Snapshot description from the configured template."""
        volume = context.source_volume
        return self.config.snapshot_description.format(
            volume_id=volume.volume_id,
            instance_id=context.instance_id,
            size=volume.size,
            target_size=context.target_size
        )

    async def run(self, context):
        volume_id = context.source_volume.volume_id
        description = self._description(context)

        self._log_debug(f"Creating snapshot of {volume_id}")
        self._log_debug(f"  Description: {description}")

        snapshot = await self.adapter.create_snapshot(volume_id, description)
        snapshot_id = snapshot.snapshot_id
        self._log_info(f"    Snapshot: {snapshot_id}")

        async def check_snapshot():
            snapshots = await self.adapter.describe_snapshots([snapshot_id])
            current = snapshots[0] if snapshots else None
            if current is None:
                return PollResult(False, None)

            self._log_debug(f"Snapshot {snapshot_id} state: {current.state}, progress: {current.progress or '?'}")

            if current.state == SnapshotState.ERROR:
                raise OperationFailedError(self.name, f"snapshot {snapshot_id} reported state 'error'")

            return PollResult(current.is_completed, current)

        snapshot = await self._poll(
            check_snapshot,
            f"snapshot {snapshot_id} to be {SnapshotState.COMPLETED}",
            self.config.snapshot_timeout
        )

        return replace(context, snapshot=snapshot), f"Snapshot {snapshot_id} completed"

"""
EBS Resize - Create Volume Operation

Creates the larger volume from the completed snapshot, in the instance's
availability zone, with the source volume's type.
"""

from dataclasses import replace

from ebs_resize.core.models import VolumeState
from ebs_resize.operations.base import BaseOperation


class CreateVolumeOperation(BaseOperation):
    """
    Creates a volume of the target size from the snapshot.

    Uses config.create_volume_timeout for the wait.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Create Volume"

    async def run(self, context):
        snapshot_id = context.snapshot.snapshot_id
        volume_type = context.source_volume.volume_type

        self._log_debug(f"Creating volume from {snapshot_id}")
        self._log_debug(f"  Size: {context.target_size}GB, Type: {volume_type}, Zone: {context.zone}")

        volume = await self.adapter.create_volume(
            snapshot_id,
            context.zone,
            volume_type,
            context.target_size
        )
        self._log_info(f"    Volume: {volume.volume_id}")

        volume = await self._wait_for_volume_state(
            volume.volume_id,
            VolumeState.AVAILABLE,
            self.config.create_volume_timeout
        )

        message = f"Volume {volume.volume_id} created ({volume.size} GB)"
        return replace(context, new_volume=volume), message

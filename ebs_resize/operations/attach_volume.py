"""
EBS Resize - Attach Volume Operation

Attaches the new volume at the device path captured from the source
volume and waits until it is in use.
"""

from dataclasses import replace

from ebs_resize.core.models import VolumeState
from ebs_resize.operations.base import BaseOperation


class AttachVolumeOperation(BaseOperation):
    """
    Attaches the new volume to the instance at the original device path.

    Uses config.attach_timeout for the wait.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Attach Volume"

    async def run(self, context):
        volume_id = context.new_volume.volume_id

        self._log_debug(f"Attaching {volume_id} to {context.instance_id} at {context.device}")
        await self.adapter.attach_volume(volume_id, context.instance_id, context.device)

        volume = await self._wait_for_volume_state(
            volume_id,
            VolumeState.IN_USE,
            self.config.attach_timeout
        )

        message = f"Volume {volume_id} attached at {context.device}"
        return replace(context, new_volume=volume), message

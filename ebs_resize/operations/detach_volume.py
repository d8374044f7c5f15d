"""
EBS Resize - Detach Volume Operation

Detaches the source volume from the instance and waits until it is
available.
"""

from dataclasses import replace

from ebs_resize.core.models import VolumeState
from ebs_resize.operations.base import BaseOperation


class DetachVolumeOperation(BaseOperation):
    """
    Detaches the source volume from its instance.

    Uses config.detach_timeout for the wait.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Detach Volume"

    async def run(self, context):
        volume_id = context.source_volume.volume_id

        self._log_debug(f"Detaching {volume_id} ({context.device}) from {context.instance_id}")
        await self.adapter.detach_volume(volume_id, context.instance_id)

        volume = await self._wait_for_volume_state(
            volume_id,
            VolumeState.AVAILABLE,
            self.config.detach_timeout
        )

        return replace(context, source_volume=volume), f"Volume {volume_id} detached"

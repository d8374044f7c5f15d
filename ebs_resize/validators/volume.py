"""
EBS Resize - Volume Validators

Validates that the instance has exactly one resizable volume and that
the requested size grows it.
"""

from ebs_resize.core.exceptions import (
    InvalidSizeError,
    MultipleVolumesError,
    NoAttachmentError,
    NoVolumeError,
    UnsupportedVolumeTypeError,
)
from ebs_resize.core.models import Volume
from ebs_resize.validators.base import BaseValidator, ValidationResult


class SingleVolumeValidator(BaseValidator):
    """
    Validates that exactly one volume of the resizable class is attached.

    This checks, in order:
    1. Exactly one volume is attached to the instance in its zone
    2. The volume is of config.resizable_volume_type ('standard')
    3. The volume reports an attachment to read the device path from

    Other volume classes can be resized in place with modify-volume,
    so they are refused here.

    Example:
        validator = SingleVolumeValidator(adapter, config, 'i-0123', 'us-east-1a')
        result = await validator.validate()

        if result.passed:
            volume = result.details['volume']
            device = result.details['device']
    """

    def __init__(self, adapter, config=None, instance_id: str = None, zone: str = None):
        """
        Args:
            adapter: Control-plane adapter
            config: Resize configuration
            instance_id: Instance whose volumes are checked
            zone: Availability zone of the instance
        """
        super().__init__(adapter, config)
        self.instance_id = instance_id
        self.zone = zone

    @property
    def name(self) -> str:
        """Display name for this validator."""
        return "Single Volume"

    async def validate(self) -> ValidationResult:
        """
        Check the volumes attached to the instance.

        Returns:
            ValidationResult; details hold 'volume' and 'device'
        """
        volumes = await self.adapter.describe_volumes(filters={
            'attachment.instance-id': self.instance_id,
            'availability-zone': self.zone,
        })

        if len(volumes) > 1:
            return self._fail(MultipleVolumesError(
                self.instance_id,
                [v.volume_id for v in volumes]
            ))

        if not volumes:
            return self._fail(NoVolumeError(self.instance_id, self.zone))

        volume = volumes[0]
        required_type = self.config.resizable_volume_type

        if volume.volume_type != required_type:
            return self._fail(UnsupportedVolumeTypeError(
                volume.volume_id,
                volume.volume_type,
                required_type
            ))

        if not volume.device:
            return self._fail(NoAttachmentError(volume.volume_id))

        return self._pass(
            f"Volume {volume.volume_id} ({volume.size} GB {volume.volume_type}) at {volume.device}",
            volume=volume,
            device=volume.device
        )


class VolumeSizeValidator(BaseValidator):
    """
    Validates that the target size does not shrink the volume.

    Needs no cloud calls: it inspects the volume already described by
    SingleVolumeValidator. Equal size is accepted.
    """

    def __init__(self, volume: Volume, target_size: int, config=None):
        """
        Args:
            volume: The volume to be resized
            target_size: Requested size in GB
            config: Resize configuration
        """
        super().__init__(None, config)
        self.volume = volume
        self.target_size = target_size

    @property
    def name(self) -> str:
        """Display name for this validator."""
        return "Volume Size"

    async def validate(self) -> ValidationResult:
        if self.target_size < self.volume.size:
            return self._fail(InvalidSizeError(
                self.volume.volume_id,
                self.volume.size,
                self.target_size
            ))

        return self._pass(
            f"{self.volume.size} GB -> {self.target_size} GB",
            current_size=self.volume.size,
            target_size=self.target_size
        )

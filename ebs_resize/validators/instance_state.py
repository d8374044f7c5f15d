"""
EBS Resize - Stopped Instance Validator

Validates that the instance exists and is stopped.
"""

from ebs_resize.core.exceptions import InstanceNotFoundError
from ebs_resize.core.models import InstanceState
from ebs_resize.validators.base import BaseValidator, ValidationResult


class StoppedInstanceValidator(BaseValidator):
    """
    Validates that the instance exists and is stopped.

    When config.required_zone is set, the instance must also be in that
    availability zone. The zone reported back is the instance's own
    placement, which decides where the new volume is created.

    Example:
        validator = StoppedInstanceValidator(adapter, config, 'i-0123')
        result = await validator.validate()

        if result.passed:
            zone = result.details['zone']
    """

    def __init__(self, adapter, config=None, instance_id: str = None):
        """
        Args:
            adapter: Control-plane adapter
            config: Resize configuration
            instance_id: Instance to check
        """
        super().__init__(adapter, config)
        self.instance_id = instance_id

    @property
    def name(self) -> str:
        """Display name for this validator."""
        return "Stopped Instance"

    async def validate(self) -> ValidationResult:
        """
        Check that a stopped instance with this id exists.

        Returns:
            ValidationResult; details hold 'instance_id' and 'zone'
        """
        zone = self.config.required_zone

        instances = await self.adapter.describe_instances(
            [self.instance_id],
            state=InstanceState.STOPPED,
            zone=zone
        )

        matches = [
            i for i in instances
            if i.instance_id == self.instance_id
            and i.state == InstanceState.STOPPED
            and (zone is None or i.zone == zone)
        ]

        if not matches:
            return self._fail(InstanceNotFoundError(self.instance_id, zone))

        instance = matches[0]
        return self._pass(
            f"Instance {instance.instance_id} is stopped in {instance.zone}",
            instance_id=instance.instance_id,
            zone=instance.zone
        )

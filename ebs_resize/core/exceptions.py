"""
EBS Resize - Custom Exception Classes

This module defines all custom exceptions used in EBS Resize.
Each exception provides a clear message naming the failing resource
and condition, plus a fix suggestion where one exists.
"""


class VolumeResizeError(Exception):
    """
    Base exception for all EBS Resize errors.

    All custom exceptions inherit from this, making it easy to catch
    any EBS Resize-specific error with a single except clause.
    """
    pass


class AuthenticationError(VolumeResizeError):
    """
    Raised when AWS credentials or region cannot be resolved.

    Common causes:
    - No credentials in the environment or shared config
    - No region configured
    """

    def __init__(self, message: str, fix: str = None):
        """
        Args:
            message: Error description
            fix: Suggested fix command (e.g., "aws configure")
        """
        self.fix = fix
        full_message = f"{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"
        super().__init__(full_message)


class ValidationError(VolumeResizeError):
    """
    Raised when pre-flight validation fails.

    Always raised before any mutating call, never retried.
    """

    def __init__(self, validator_name: str, message: str, fix: str = None):
        """
        Args:
            validator_name: Name of the validator that failed
            message: What failed
            fix: Suggested fix
        """
        self.validator_name = validator_name
        self.reason = message
        self.fix = fix

        full_message = f"Validation failed: {validator_name}\n{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"

        super().__init__(full_message)


class InstanceNotFoundError(ValidationError):
    """
    Raised when no stopped instance matches the id (and zone, if required).
    """

    def __init__(self, instance_id: str, zone: str = None):
        self.instance_id = instance_id
        self.zone = zone

        message = f"No stopped instance '{instance_id}' found"
        if zone:
            message += f" in availability zone '{zone}'"

        super().__init__(
            "Stopped Instance",
            message,
            fix=f"aws ec2 stop-instances --instance-ids {instance_id}"
        )


class MultipleVolumesError(ValidationError):
    """
    Raised when more than one volume is attached to the instance.
    """

    def __init__(self, instance_id: str, volume_ids: list):
        self.instance_id = instance_id
        self.volume_ids = list(volume_ids)

        message = f"Instance '{instance_id}' has {len(self.volume_ids)} volumes attached"
        message += f": {', '.join(self.volume_ids)}"
        message += "\nOnly single-volume instances are supported."

        super().__init__("Single Volume", message)


class NoVolumeError(ValidationError):
    """
    Raised when no volume is attached to the instance.
    """

    def __init__(self, instance_id: str, zone: str):
        self.instance_id = instance_id
        self.zone = zone

        message = f"No volume attached to instance '{instance_id}' in availability zone '{zone}'"
        super().__init__("Single Volume", message)


class UnsupportedVolumeTypeError(ValidationError):
    """
    Raised when the volume is not of the resizable (magnetic) class.

    Other classes support in-place resize and must use modify-volume instead.
    """

    def __init__(self, volume_id: str, volume_type: str, required_type: str):
        self.volume_id = volume_id
        self.volume_type = volume_type
        self.required_type = required_type

        message = f"Volume '{volume_id}' is of type '{volume_type}'"
        message += f"\nRequired type: {required_type}"

        super().__init__(
            "Volume Type",
            message,
            fix=f"aws ec2 modify-volume --volume-id {volume_id} --size <GB>"
        )


class NoAttachmentError(ValidationError):
    """
    Raised when the volume reports no attachment (inconsistent remote data).
    """

    def __init__(self, volume_id: str):
        self.volume_id = volume_id

        message = f"Volume '{volume_id}' reports no attachment"
        super().__init__("Volume Attachment", message)


class InvalidSizeError(ValidationError):
    """
    Raised when the target size is smaller than the current volume size.
    """

    def __init__(self, volume_id: str, current_size: int, target_size: int):
        self.volume_id = volume_id
        self.current_size = current_size
        self.target_size = target_size

        message = f"Target size {target_size} GB is smaller than current size"
        message += f" {current_size} GB of volume '{volume_id}'"
        message += "\nVolumes can only grow."

        super().__init__("Volume Size", message)


class PollTimeoutError(VolumeResizeError):
    """
    Raised when a state transition does not happen within its time budget.

    Fatal for the run; the system never retries a timed-out stage.
    """

    def __init__(self, description: str, elapsed: float, timeout: float = None):
        """
        Args:
            description: What was being waited for
            elapsed: Seconds spent waiting
            timeout: The budget that was exceeded
        """
        self.description = description
        self.elapsed = elapsed
        self.timeout = timeout

        message = f"Timed out waiting for {description} after {elapsed:.1f}s"
        if timeout is not None:
            message += f" (limit: {timeout}s)"

        super().__init__(message)


class AdapterError(VolumeResizeError):
    """
    Raised when a cloud control-plane call fails.

    Covers permissions, rate limiting and transient network errors.
    Retrying transient failures is left to the client layer.
    """

    def __init__(self, operation: str, reason: str, code: str = None):
        """
        Args:
            operation: Name of the cloud call (e.g., 'DetachVolume')
            reason: Why it failed
            code: Provider error code, if any
        """
        self.operation = operation
        self.reason = reason
        self.code = code

        message = f"Cloud call '{operation}' failed"
        if code:
            message += f" [{code}]"
        message += f": {reason}"

        super().__init__(message)


class OperationFailedError(VolumeResizeError):
    """
    Raised when a remote resource reaches a terminal failure state.

    Example: a snapshot that reports state 'error'.
    """

    def __init__(self, operation_name: str, reason: str):
        """
        Args:
            operation_name: Name of the operation (e.g., 'Create Snapshot')
            reason: Why it failed
        """
        self.operation_name = operation_name
        self.reason = reason

        message = f"Operation '{operation_name}' failed: {reason}"
        super().__init__(message)

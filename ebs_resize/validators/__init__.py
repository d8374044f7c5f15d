"""
EBS Resize - Validators Module

This module provides the pre-flight checks that run before any mutating
call.

Usage:
    from ebs_resize.validators import StoppedInstanceValidator

    result = await StoppedInstanceValidator(adapter, config, 'i-0123').validate()

    if not result.passed:
        raise result.error
"""

from ebs_resize.validators.base import (
    BaseValidator,
    ValidationResult,
    ValidationResults
)
from ebs_resize.validators.instance_state import StoppedInstanceValidator
from ebs_resize.validators.volume import SingleVolumeValidator, VolumeSizeValidator

__all__ = [
    # Base classes
    'BaseValidator',
    'ValidationResult',
    'ValidationResults',

    # Validators
    'StoppedInstanceValidator',
    'SingleVolumeValidator',
    'VolumeSizeValidator',
]

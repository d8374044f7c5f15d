"""EBS Resize - grow a standard (magnetic) EBS volume by snapshot and recreate.

Standard volumes cannot be resized in place. This tool detaches the
single volume of a stopped instance, snapshots it, creates a larger
volume from the snapshot and attaches it at the original device path.

Example usage:
    >>> from ebs_resize import resize_volume
    >>> outcome = resize_volume('i-0123456789abcdef0', 25)
    >>> outcome.new_volume_id
    'vol-0fedcba9876543210'
"""

from ebs_resize.core.config import VERSION, ResizeConfig
from ebs_resize.main import resize_volume, resize_volume_async

__version__ = VERSION

__all__ = [
    'ResizeConfig',
    'resize_volume',
    'resize_volume_async',
]

"""
EBS Resize - Configuration Management

This module manages configuration options for EBS Resize operations.
"""

from dataclasses import dataclass
from typing import Optional

VERSION = '1.0.0'


@dataclass
class ResizeConfig:
    """
    Configuration for resize operations.

    This stores all options that can be customized for a resize operation.
    Each stage has its own timeout because each cloud call has its own
    latency class: attach/detach are fast, a full-volume snapshot is slow.

    Example:
        config = ResizeConfig(
            snapshot_timeout=1800,
            required_zone='us-east-1a'
        )
    """

    # Volume settings
    resizable_volume_type: str = 'standard'  # Magnetic, no in-place resize
    snapshot_description: str = 'ebs-resize: {volume_id} of {instance_id} ({size} GB -> {target_size} GB)'

    # Placement settings
    region: Optional[str] = None  # None: resolve from the environment
    required_zone: Optional[str] = None  # None: use the instance's own zone

    # Timeout settings (in seconds)
    detach_timeout: int = 60
    snapshot_timeout: int = 900  # 15 minutes for the full-volume copy
    create_volume_timeout: int = 60
    attach_timeout: int = 120
    poll_interval: float = 5

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    log_to_stderr: bool = False  # Keep stdout clean for json/yaml output

    # Behavior settings
    dry_run: bool = False  # Validate and show the plan without doing it
    show_progress: bool = True


def create_resize_config(**kwargs) -> ResizeConfig:
    """
    Create a resize configuration with custom options.

    Args:
        **kwargs: Configuration options (any field from ResizeConfig)

    Returns:
        ResizeConfig: Configuration object

    Example:
        config = create_resize_config(
            attach_timeout=300,
            log_level='DEBUG'
        )
    """
    return ResizeConfig(**kwargs)

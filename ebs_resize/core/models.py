"""
EBS Resize - Data Models

Plain snapshots of remote state as reported by the control plane.
None of these are mutated by the workflow; a fresh copy comes back
from every describe call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class InstanceState:
    """EC2 instance power states used by the workflow."""
    STOPPED = 'stopped'
    PENDING = 'pending'
    RUNNING = 'running'


class VolumeState:
    """EBS volume states used by the workflow."""
    CREATING = 'creating'
    AVAILABLE = 'available'
    IN_USE = 'in-use'


class SnapshotState:
    """EBS snapshot states."""
    PENDING = 'pending'
    COMPLETED = 'completed'
    ERROR = 'error'


@dataclass(frozen=True)
class Instance:
    """A compute instance."""
    instance_id: str
    state: str
    zone: str

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> 'Instance':
        """Create Instance from an EC2 DescribeInstances entry."""
        return cls(
            instance_id=data['InstanceId'],
            state=data.get('State', {}).get('Name', ''),
            zone=data.get('Placement', {}).get('AvailabilityZone', '')
        )


@dataclass(frozen=True)
class Attachment:
    """Binding of a volume to an instance at a device path."""
    device: str
    instance_id: Optional[str] = None
    state: Optional[str] = None

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> 'Attachment':
        return cls(
            device=data['Device'],
            instance_id=data.get('InstanceId'),
            state=data.get('State')
        )


@dataclass(frozen=True)
class Volume:
    """A block-storage volume."""
    volume_id: str
    volume_type: str
    size: int
    state: str
    zone: str
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def device(self) -> Optional[str]:
        """Device path of the first attachment, if any."""
        if not self.attachments:
            return None
        return self.attachments[0].device

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> 'Volume':
        """Create Volume from an EC2 DescribeVolumes/CreateVolume entry."""
        return cls(
            volume_id=data['VolumeId'],
            volume_type=data.get('VolumeType', ''),
            size=data.get('Size', 0),
            state=data.get('State', ''),
            zone=data.get('AvailabilityZone', ''),
            attachments=[Attachment.from_aws(a) for a in data.get('Attachments', [])]
        )


@dataclass(frozen=True)
class Snapshot:
    """A point-in-time copy of a volume."""
    snapshot_id: str
    volume_id: str
    state: str
    progress: str = ''
    start_time: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.state == SnapshotState.COMPLETED

    @classmethod
    def from_aws(cls, data: Dict[str, Any]) -> 'Snapshot':
        """Create Snapshot from an EC2 DescribeSnapshots/CreateSnapshot entry."""
        return cls(
            snapshot_id=data['SnapshotId'],
            volume_id=data.get('VolumeId', ''),
            state=data.get('State', ''),
            progress=data.get('Progress', ''),
            start_time=data.get('StartTime')
        )


@dataclass(frozen=True)
class WorkflowContext:
    """
    The value threaded through the resize stages.

    Each stage returns a new context (dataclasses.replace) instead of
    mutating this one. The device path is captured once from the source
    volume's attachment and copied forward unchanged; the new volume is
    reattached at exactly that path.

    Attributes:
        instance_id: Instance being resized
        zone: Availability zone of the instance (from validation)
        target_size: Requested size in GB
        source_volume: Volume attached when the run started
        device: Device path read from the source volume's attachment
        snapshot: Snapshot taken from the source volume
        new_volume: Volume created from the snapshot
    """
    instance_id: str
    target_size: int
    zone: Optional[str] = None
    source_volume: Optional[Volume] = None
    device: Optional[str] = None
    snapshot: Optional[Snapshot] = None
    new_volume: Optional[Volume] = None

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a dict for output formatting."""
        return {
            'instanceId': self.instance_id,
            'availabilityZone': self.zone,
            'device': self.device,
            'sourceVolumeId': self.source_volume.volume_id if self.source_volume else None,
            'sourceSize': self.source_volume.size if self.source_volume else None,
            'snapshotId': self.snapshot.snapshot_id if self.snapshot else None,
            'newVolumeId': self.new_volume.volume_id if self.new_volume else None,
            'targetSize': self.target_size,
        }

"""
EBS Resize - Compute Adapter Interface

The seven control-plane calls the workflow depends on.
The orchestrator only ever talks to this interface, never to transport
details. Implementations: EC2Adapter (boto3) and the in-memory fake used
by the test suite.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ebs_resize.core.models import Instance, Snapshot, Volume


class ComputeAdapter(ABC):
    """
    Base class for control-plane adapters.

    Every method is a coroutine returning data-model objects.
    Failures must be raised as AdapterError.
    """

    @abstractmethod
    async def describe_instances(self, instance_ids: List[str], state: Optional[str] = None,
                                 zone: Optional[str] = None) -> List[Instance]:
        """
        Describe instances, optionally filtered by power state and zone.

        Returns:
            Matching instances (empty list if none match)
        """

    @abstractmethod
    async def describe_volumes(self, volume_ids: Optional[List[str]] = None,
                               filters: Optional[Dict[str, str]] = None) -> List[Volume]:
        """
        Describe volumes by id or by filters.

        Args:
            volume_ids: Volume ids to describe
            filters: Filter name -> value (e.g., {'attachment.instance-id': 'i-123'})
        """

    @abstractmethod
    async def create_snapshot(self, volume_id: str, description: str) -> Snapshot:
        """Start a snapshot of a volume."""

    @abstractmethod
    async def describe_snapshots(self, snapshot_ids: List[str]) -> List[Snapshot]:
        """Describe snapshots by id."""

    @abstractmethod
    async def create_volume(self, snapshot_id: str, zone: str, volume_type: str,
                            size: int) -> Volume:
        """Create a volume from a snapshot."""

    @abstractmethod
    async def attach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        """Attach a volume to an instance at a device path."""

    @abstractmethod
    async def detach_volume(self, volume_id: str, instance_id: str) -> None:
        """Detach a volume from an instance."""

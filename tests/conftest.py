"""Shared pytest fixtures for the EBS Resize test suite."""

from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from ebs_resize.core.adapter import ComputeAdapter
from ebs_resize.core.config import ResizeConfig
from ebs_resize.core.models import (
    Attachment,
    Instance,
    Snapshot,
    SnapshotState,
    Volume,
    VolumeState,
)

ZONE = 'uv-jupiter-2b'
INSTANCE_ID = 'i-0123456789abcdef0'
SOURCE_VOLUME_ID = 'vol-source'
DEVICE = '/dev/xvda1'

MUTATING_CALLS = ('detach_volume', 'create_snapshot', 'create_volume', 'attach_volume')


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Clock whose sleep advances time instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeComputeAdapter(ComputeAdapter):
    """
    In-memory control plane.

    Mutating calls put a resource into a transitional state and schedule
    its final state. The final state becomes visible after `settle_after`
    describe calls for that resource, or immediately via settle().
    Resources listed in `stuck` never settle.
    """

    def __init__(self, settle_after: int = 1):
        self.instances: Dict[str, Instance] = {}
        self.volumes: Dict[str, Volume] = {}
        self.snapshots: Dict[str, Snapshot] = {}
        self.calls: List[tuple] = []
        self.settle_after = settle_after
        self.stuck = set()
        self.fail_on: Dict[str, Exception] = {}
        self.snapshot_final_state = SnapshotState.COMPLETED
        self._pending: Dict[str, list] = {}
        self._owners: Dict[str, Optional[str]] = {}
        self._counter = 0

    # -- setup helpers -----------------------------------------------------

    def add_instance(self, instance_id: str, state: str = 'stopped', zone: str = ZONE):
        self.instances[instance_id] = Instance(instance_id, state, zone)

    def add_volume(self, volume_id: str, volume_type: str = 'standard', size: int = 8,
                   zone: str = ZONE, instance_id: Optional[str] = INSTANCE_ID,
                   device: Optional[str] = DEVICE, state: str = VolumeState.IN_USE):
        attachments = []
        if instance_id and device:
            attachments.append(Attachment(device=device, instance_id=instance_id, state='attached'))
        self.volumes[volume_id] = Volume(volume_id, volume_type, size, state, zone, attachments)
        self._owners[volume_id] = instance_id

    def settle(self, resource_id: str):
        """Make the scheduled final state visible now."""
        remaining_and_final = self._pending.pop(resource_id, None)
        if remaining_and_final is not None:
            self._store(remaining_and_final[1])

    def mutating_calls(self) -> List[str]:
        return [name for name, _ in self.calls if name in MUTATING_CALLS]

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    # -- internals ---------------------------------------------------------

    def _record(self, name: str, **params):
        self.calls.append((name, params))
        if name in self.fail_on:
            raise self.fail_on[name]

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter:04d}"

    def _schedule(self, resource_id: str, final):
        self._pending[resource_id] = [self.settle_after, final]

    def _store(self, resource):
        if isinstance(resource, Snapshot):
            self.snapshots[resource.snapshot_id] = resource
        else:
            self.volumes[resource.volume_id] = resource

    def _observe(self, resource_id: str):
        pending = self._pending.get(resource_id)
        if pending is None or resource_id in self.stuck:
            return
        if pending[0] <= 0:
            self.settle(resource_id)
        else:
            pending[0] -= 1

    # -- ComputeAdapter ----------------------------------------------------

    async def describe_instances(self, instance_ids, state=None, zone=None):
        self._record('describe_instances', instance_ids=list(instance_ids), state=state, zone=zone)
        return [
            i for i in self.instances.values()
            if i.instance_id in instance_ids
            and (state is None or i.state == state)
            and (zone is None or i.zone == zone)
        ]

    async def describe_volumes(self, volume_ids=None, filters=None):
        self._record('describe_volumes', volume_ids=volume_ids, filters=filters)
        filters = filters or {}
        for volume_id in volume_ids or []:
            self._observe(volume_id)

        owners = self._owners
        matches = []
        for volume in self.volumes.values():
            if volume_ids and volume.volume_id not in volume_ids:
                continue
            if 'attachment.instance-id' in filters:
                if owners.get(volume.volume_id) != filters['attachment.instance-id']:
                    continue
            if 'availability-zone' in filters and volume.zone != filters['availability-zone']:
                continue
            matches.append(volume)
        return matches

    async def create_snapshot(self, volume_id, description):
        self._record('create_snapshot', volume_id=volume_id, description=description)
        snapshot = Snapshot(self._next_id('snap'), volume_id, SnapshotState.PENDING, '0%')
        self._store(snapshot)
        progress = '100%' if self.snapshot_final_state == SnapshotState.COMPLETED else '42%'
        self._schedule(snapshot.snapshot_id,
                       replace(snapshot, state=self.snapshot_final_state, progress=progress))
        return snapshot

    async def describe_snapshots(self, snapshot_ids):
        self._record('describe_snapshots', snapshot_ids=list(snapshot_ids))
        for snapshot_id in snapshot_ids:
            self._observe(snapshot_id)
        return [self.snapshots[s] for s in snapshot_ids if s in self.snapshots]

    async def create_volume(self, snapshot_id, zone, volume_type, size):
        self._record('create_volume', snapshot_id=snapshot_id, zone=zone,
                     volume_type=volume_type, size=size)
        volume = Volume(self._next_id('vol-new'), volume_type, size, VolumeState.CREATING, zone)
        self._store(volume)
        self._schedule(volume.volume_id, replace(volume, state=VolumeState.AVAILABLE))
        return volume

    async def attach_volume(self, volume_id, instance_id, device):
        self._record('attach_volume', volume_id=volume_id, instance_id=instance_id, device=device)
        volume = self.volumes[volume_id]
        self._owners[volume_id] = instance_id
        attachment = Attachment(device=device, instance_id=instance_id, state='attached')
        self._schedule(volume_id, replace(volume, state=VolumeState.IN_USE, attachments=[attachment]))

    async def detach_volume(self, volume_id, instance_id):
        self._record('detach_volume', volume_id=volume_id, instance_id=instance_id)
        volume = self.volumes[volume_id]
        self._owners[volume_id] = None
        self._schedule(volume_id, replace(volume, state=VolumeState.AVAILABLE, attachments=[]))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    """Time-accelerated clock; sleeping costs no wall time."""
    return FakeClock()


@pytest.fixture()
def config() -> ResizeConfig:
    """Default configuration with progress bars off."""
    return ResizeConfig(show_progress=False)


@pytest.fixture()
def adapter() -> FakeComputeAdapter:
    """Empty fake control plane."""
    return FakeComputeAdapter()


@pytest.fixture()
def stopped_instance(adapter: FakeComputeAdapter) -> FakeComputeAdapter:
    """A stopped instance with a single 8 GB standard volume at /dev/xvda1."""
    adapter.add_instance(INSTANCE_ID)
    adapter.add_volume(SOURCE_VOLUME_ID)
    return adapter

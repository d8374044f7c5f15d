"""End-to-end tests for the resize workflow against the fake control plane."""

import pytest

from ebs_resize.core.config import ResizeConfig
from ebs_resize.core.exceptions import (
    AdapterError,
    InstanceNotFoundError,
    InvalidSizeError,
    MultipleVolumesError,
    PollTimeoutError,
    UnsupportedVolumeTypeError,
)
from ebs_resize.core.models import VolumeState
from ebs_resize.orchestration import ResizeOrchestrator, WorkflowState

from conftest import DEVICE, INSTANCE_ID, SOURCE_VOLUME_ID, ZONE


def orchestrator(adapter, clock, size=25, config=None):
    return ResizeOrchestrator(
        adapter=adapter,
        instance_id=INSTANCE_ID,
        target_size=size,
        config=config or ResizeConfig(show_progress=False),
        sleep=clock.sleep,
        clock=clock
    )


class TestResizeSucceeds:
    """Scenario A: stopped instance, single 8 GB standard volume, target 25 GB."""

    @pytest.mark.asyncio
    async def test_reaches_succeeded(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        assert outcome.success
        assert outcome.state == WorkflowState.SUCCEEDED
        assert outcome.error is None

    @pytest.mark.asyncio
    async def test_new_volume_size_device_and_zone(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        new_volume = stopped_instance.volumes[outcome.new_volume_id]
        assert new_volume.size == 25
        assert new_volume.state == VolumeState.IN_USE
        assert new_volume.device == DEVICE
        assert new_volume.zone == ZONE
        assert new_volume.volume_type == 'standard'

    @pytest.mark.asyncio
    async def test_device_path_round_trip(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        attach_calls = [p for name, p in stopped_instance.calls if name == 'attach_volume']
        assert len(attach_calls) == 1
        assert attach_calls[0]['device'] == DEVICE
        assert outcome.context.device == DEVICE
        assert outcome.context.new_volume.device == DEVICE

    @pytest.mark.asyncio
    async def test_mutating_calls_in_order(self, stopped_instance, clock) -> None:
        await orchestrator(stopped_instance, clock).run()

        assert stopped_instance.mutating_calls() == [
            'detach_volume',
            'create_snapshot',
            'create_volume',
            'attach_volume',
        ]

    @pytest.mark.asyncio
    async def test_history_walks_every_state(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        assert [r.state for r in outcome.history] == [
            WorkflowState.VALIDATING,
            WorkflowState.DETACHING,
            WorkflowState.SNAPSHOTTING,
            WorkflowState.RECREATING,
            WorkflowState.ATTACHING,
            WorkflowState.SUCCEEDED,
        ]
        assert all(r.success for r in outcome.history[:-1])

    @pytest.mark.asyncio
    async def test_original_volume_and_snapshot_kept(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        assert SOURCE_VOLUME_ID in stopped_instance.volumes
        assert outcome.context.snapshot.snapshot_id in stopped_instance.snapshots
        assert outcome.context.source_volume.state == VolumeState.AVAILABLE

    @pytest.mark.asyncio
    async def test_equal_size_is_accepted(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock, size=8).run()

        assert outcome.success

    @pytest.mark.asyncio
    async def test_outcome_dict(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock).run()

        data = outcome.to_dict()
        assert data['status'] == 'SUCCEEDED'
        assert data['instanceId'] == INSTANCE_ID
        assert data['sourceVolumeId'] == SOURCE_VOLUME_ID
        assert data['newVolumeId'] == outcome.new_volume_id
        assert data['device'] == DEVICE
        assert 'error' not in data


class TestValidationFailures:
    """Scenarios B, C and E: rejected before any mutating call."""

    @pytest.mark.asyncio
    async def test_two_volumes_fail_with_multiple_volumes(self, stopped_instance, clock) -> None:
        stopped_instance.add_volume('vol-data', device='/dev/xvdf')

        outcome = await orchestrator(stopped_instance, clock).run()

        assert outcome.state == WorkflowState.FAILED
        assert isinstance(outcome.error, MultipleVolumesError)
        assert stopped_instance.mutating_calls() == []

    @pytest.mark.asyncio
    async def test_non_standard_type_fails_without_detach(self, adapter, clock) -> None:
        adapter.add_instance(INSTANCE_ID)
        adapter.add_volume(SOURCE_VOLUME_ID, volume_type='gp2')

        outcome = await orchestrator(adapter, clock).run()

        assert isinstance(outcome.error, UnsupportedVolumeTypeError)
        assert 'detach_volume' not in adapter.call_names()

    @pytest.mark.asyncio
    async def test_smaller_size_fails_before_detach(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock, size=4).run()

        assert isinstance(outcome.error, InvalidSizeError)
        assert outcome.error.current_size == 8
        assert stopped_instance.mutating_calls() == []

    @pytest.mark.asyncio
    async def test_running_instance_fails_not_found(self, adapter, clock) -> None:
        adapter.add_instance(INSTANCE_ID, state='running')
        adapter.add_volume(SOURCE_VOLUME_ID)

        outcome = await orchestrator(adapter, clock).run()

        assert isinstance(outcome.error, InstanceNotFoundError)
        assert outcome.history[-1].state == WorkflowState.FAILED
        assert outcome.history[0].success is False

    @pytest.mark.asyncio
    async def test_volume_lookup_uses_instance_zone(self, adapter, clock) -> None:
        adapter.add_instance(INSTANCE_ID, zone='uv-jupiter-2c')
        adapter.add_volume(SOURCE_VOLUME_ID, zone='uv-jupiter-2c')

        outcome = await orchestrator(adapter, clock).run()

        assert outcome.success
        create = [p for name, p in adapter.calls if name == 'create_volume'][0]
        assert create['zone'] == 'uv-jupiter-2c'


class TestStageFailures:
    """Scenario D and adapter errors: fail fast, no compensation."""

    @pytest.mark.asyncio
    async def test_snapshot_timeout_stops_before_create_volume(self, stopped_instance, clock) -> None:
        stopped_instance.stuck.add('snap-0001')

        outcome = await orchestrator(stopped_instance, clock).run()

        assert outcome.state == WorkflowState.FAILED
        assert isinstance(outcome.error, PollTimeoutError)
        assert 'snap-0001' in str(outcome.error)
        assert outcome.error.timeout == 900
        assert 900 < outcome.error.elapsed <= 905
        assert 'create_volume' not in stopped_instance.call_names()
        assert outcome.history[-2].state == WorkflowState.SNAPSHOTTING
        assert outcome.history[-2].success is False

    @pytest.mark.asyncio
    async def test_snapshot_timeout_is_configurable(self, stopped_instance, clock) -> None:
        stopped_instance.stuck.add('snap-0001')
        config = ResizeConfig(snapshot_timeout=30, show_progress=False)

        outcome = await orchestrator(stopped_instance, clock, config=config).run()

        assert outcome.error.timeout == 30
        assert clock.now <= 35 + 5  # detach took one interval

    @pytest.mark.asyncio
    async def test_adapter_error_propagates_without_retry(self, stopped_instance, clock) -> None:
        stopped_instance.fail_on['create_volume'] = AdapterError(
            'CreateVolume', 'Rate exceeded', code='RequestLimitExceeded'
        )

        outcome = await orchestrator(stopped_instance, clock).run()

        assert isinstance(outcome.error, AdapterError)
        assert stopped_instance.call_names().count('create_volume') == 1
        assert 'attach_volume' not in stopped_instance.call_names()

    @pytest.mark.asyncio
    async def test_failure_leaves_volume_detached(self, stopped_instance, clock) -> None:
        stopped_instance.fail_on['create_snapshot'] = AdapterError('CreateSnapshot', 'denied')

        outcome = await orchestrator(stopped_instance, clock).run()

        assert not outcome.success
        assert stopped_instance.mutating_calls() == ['detach_volume', 'create_snapshot']
        assert stopped_instance.volumes[SOURCE_VOLUME_ID].state == VolumeState.AVAILABLE
        assert outcome.context.source_volume.state == VolumeState.AVAILABLE

    @pytest.mark.asyncio
    async def test_error_in_outcome_dict(self, stopped_instance, clock) -> None:
        outcome = await orchestrator(stopped_instance, clock, size=4).run()

        data = outcome.to_dict()
        assert data['status'] == 'FAILED'
        assert 'Volume Size' in data['error']


class TestDryRun:
    """Validation only, no mutating calls."""

    @pytest.mark.asyncio
    async def test_dry_run_validates_only(self, stopped_instance, clock) -> None:
        config = ResizeConfig(dry_run=True, show_progress=False)

        outcome = await orchestrator(stopped_instance, clock, config=config).run()

        assert outcome.success
        assert outcome.state == WorkflowState.VALIDATED
        assert outcome.new_volume_id is None
        assert outcome.context.device == DEVICE
        assert stopped_instance.mutating_calls() == []

    @pytest.mark.asyncio
    async def test_dry_run_still_rejects(self, stopped_instance, clock) -> None:
        config = ResizeConfig(dry_run=True, show_progress=False)

        outcome = await orchestrator(stopped_instance, clock, size=4, config=config).run()

        assert outcome.state == WorkflowState.FAILED

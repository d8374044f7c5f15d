"""
EBS Resize - Resize Orchestrator

Coordinates the resize workflow:
1. Validates (stopped instance, single standard volume, size)
2. Detaches the source volume
3. Snapshots it
4. Creates the larger volume from the snapshot
5. Attaches it at the original device path

Stages run strictly in order and the first failure ends the run.
Nothing is undone on failure: the instance may be left without its
volume, and the snapshot or new volume may be left behind.
"""

import asyncio
import time

from ebs_resize.core.config import ResizeConfig
from ebs_resize.core.exceptions import VolumeResizeError
from ebs_resize.core.models import WorkflowContext
from ebs_resize.operations import (
    AttachVolumeOperation,
    CreateSnapshotOperation,
    CreateVolumeOperation,
    DetachVolumeOperation,
)
from ebs_resize.orchestration.state import ResizeOutcome, StateTracker, WorkflowState
from ebs_resize.utils.progress import create_progress_tracker
from ebs_resize.validators import (
    SingleVolumeValidator,
    StoppedInstanceValidator,
    ValidationResults,
    VolumeSizeValidator,
)


class ResizeOrchestrator:
    """
    Orchestrates the resize workflow.

    Example:
        orchestrator = ResizeOrchestrator(
            adapter=EC2Adapter(client, logger),
            instance_id='i-0123',
            target_size=25,
            config=config,
            logger=logger
        )

        outcome = await orchestrator.run()
        if outcome.success:
            print(outcome.new_volume_id)
    """

    def __init__(self, adapter, instance_id: str, target_size: int,
                 config: ResizeConfig = None, logger=None,
                 sleep=asyncio.sleep, clock=time.monotonic):
        """
        Initialize resize orchestrator.

        Args:
            adapter: Control-plane adapter
            instance_id: Instance whose volume is resized
            target_size: Requested size in GB
            config: Optional resize configuration
            logger: Optional logger
            sleep: Coroutine function used between polls
            clock: Time source for poll timeouts
        """
        self.adapter = adapter
        self.instance_id = instance_id
        self.target_size = target_size
        self.config = config or ResizeConfig()
        self.logger = logger
        self.sleep = sleep
        self.clock = clock

        self.state_tracker = StateTracker(logger)
        self.validation_results = ValidationResults()

        # Last context a stage produced; reported on failure
        self.context = WorkflowContext(instance_id=instance_id, target_size=target_size)

    def _log_info(self, message: str):
        """Log info message."""
        if self.logger:
            self.logger.info(message)

    def _log_debug(self, message: str):
        """Log debug message."""
        if self.logger:
            self.logger.debug(message)

    def _log_error(self, message: str):
        """Log error message."""
        if self.logger:
            self.logger.error(message)

    def _stages(self):
        """The mutating stages, in order, with the state each runs in."""
        args = (self.adapter, self.config, self.logger, self.sleep, self.clock)
        return [
            (WorkflowState.DETACHING, "Detaching volume", DetachVolumeOperation(*args)),
            (WorkflowState.SNAPSHOTTING, "Creating snapshot", CreateSnapshotOperation(*args)),
            (WorkflowState.RECREATING, "Creating volume from snapshot", CreateVolumeOperation(*args)),
            (WorkflowState.ATTACHING, "Attaching new volume", AttachVolumeOperation(*args)),
        ]

    async def _check(self, validator):
        """Run one validator; raise its error if it failed."""
        self._log_debug(f"Running validator: {validator.name}")
        result = await validator.validate()
        self.validation_results.add(result)

        if not result.passed:
            self._log_info(f"  [FAIL] {result.validator_name}")
            raise result.error

        self._log_info(f"  [OK] {result.validator_name}: {result.message}")
        return result

    async def validate(self) -> WorkflowContext:
        """
        Run pre-flight validation.

        Checks, in order:
        - Instance exists and is stopped (and in the required zone)
        - Exactly one standard volume is attached, with a device path
        - Target size is not smaller than the current size

        Returns:
            WorkflowContext holding zone, source volume and device path

        Raises:
            ValidationError: From the first failing check
        """
        self._log_info("Pre-flight Validation:")

        result = await self._check(StoppedInstanceValidator(
            self.adapter, self.config, self.instance_id
        ))
        zone = result.details['zone']

        result = await self._check(SingleVolumeValidator(
            self.adapter, self.config, self.instance_id, zone
        ))
        volume = result.details['volume']
        device = result.details['device']

        await self._check(VolumeSizeValidator(volume, self.target_size, self.config))

        self._log_debug("All validations passed")
        return WorkflowContext(
            instance_id=self.instance_id,
            target_size=self.target_size,
            zone=zone,
            source_volume=volume,
            device=device
        )

    async def execute(self, context: WorkflowContext) -> WorkflowContext:
        """
        Execute the mutating stages.

        Args:
            context: Context produced by validate()

        Returns:
            Final context with snapshot and new volume

        Raises:
            VolumeResizeError: From the first failing stage
        """
        self._log_info("")
        self._log_info("Executing Resize:")
        self._log_debug(f"Config: {self.config}")

        stages = self._stages()
        progress = create_progress_tracker(
            total_steps=len(stages),
            desc=f"Resize {self.instance_id}",
            enabled=self.config.show_progress
        )
        progress.start()

        try:
            for state, step_name, operation in stages:
                self.state_tracker.transition(state)
                progress.update_step(step_name)
                self._log_info(f"  {step_name}...")

                result = await operation.execute(context)
                self.state_tracker.complete(result.success, result.message)

                if not result.success:
                    raise result.error

                context = result.context
                self.context = context
                self._log_info(f"  [OK] {result.message}")
                progress.advance()
        finally:
            progress.finish()

        return context

    def _log_plan(self, context: WorkflowContext):
        """Log what a real run would do (dry run)."""
        volume = context.source_volume
        self._log_info("")
        self._log_info("Dry run, no changes made. A real run would:")
        self._log_info(f"  1. Detach {volume.volume_id} from {context.instance_id}")
        self._log_info(f"  2. Snapshot {volume.volume_id}")
        self._log_info(f"  3. Create a {context.target_size} GB {volume.volume_type} volume in {context.zone}")
        self._log_info(f"  4. Attach it at {context.device}")

    async def run(self) -> ResizeOutcome:
        """
        Run the whole workflow.

        Returns:
            ResizeOutcome in state SUCCEEDED, VALIDATED (dry run) or FAILED.
            Only VolumeResizeError is turned into FAILED; anything else
            propagates.
        """
        tracker = self.state_tracker

        try:
            tracker.transition(WorkflowState.VALIDATING)
            self.context = await self.validate()
            tracker.complete(True, "All validations passed")

            if self.config.dry_run:
                self._log_plan(self.context)
                tracker.transition(WorkflowState.VALIDATED)
                return ResizeOutcome(tracker.state, self.context, history=tracker.history)

            self.context = await self.execute(self.context)

        except VolumeResizeError as e:
            if tracker.state == WorkflowState.VALIDATING:
                tracker.complete(False, str(e))
                self._log_error("Pre-flight validation failed!")
                if self.logger:
                    self.validation_results.log_failures(self.logger)
            else:
                self._log_error(f"Failed while {tracker.state.value}")
            tracker.transition(WorkflowState.FAILED)
            self._log_debug(tracker.get_summary())
            return ResizeOutcome(tracker.state, self.context, error=e, history=tracker.history)

        tracker.transition(WorkflowState.SUCCEEDED)
        self._log_debug(tracker.get_summary())
        return ResizeOutcome(tracker.state, self.context, history=tracker.history)

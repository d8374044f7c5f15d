"""
EBS Resize - Base Operation

This module provides the base class for all workflow stages.
Each operation does ONE thing: issue a single mutating cloud call and
wait for the remote state to settle.

Operations never undo themselves. A failed run may leave the volume
detached or a snapshot behind; the operator inspects remote state.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ebs_resize.core.adapter import ComputeAdapter
from ebs_resize.core.config import ResizeConfig
from ebs_resize.core.exceptions import VolumeResizeError
from ebs_resize.core.models import Volume, WorkflowContext
from ebs_resize.operations.polling import PollResult, poll_until


@dataclass
class OperationResult:
    """
    Result from an operation.

    Attributes:
        operation_name: Name of the operation (for display)
        success: True if operation succeeded, False if failed
        message: Human-readable message about the result
        context: Workflow context produced by the operation (on success)
        error: The error that stopped the operation (on failure)
    """
    operation_name: str
    success: bool
    message: str
    context: Optional[WorkflowContext] = None
    error: Optional[VolumeResizeError] = None

    def __str__(self):
        """String representation."""
        status = "[OK]" if self.success else "[X]"
        return f"{status} {self.operation_name}: {self.message}"


class BaseOperation(ABC):
    """
    Base class for all operations.

    Every operation must:
    1. Inherit from this class
    2. Implement run() (take a context, return a new context and a message)
    3. Implement the name property

    execute() wraps run(): any VolumeResizeError becomes a failed
    OperationResult carrying the error. Anything else is a bug and
    propagates.

    Example usage:
        operation = DetachVolumeOperation(adapter, config, logger)
        result = await operation.execute(context)

        if result.success:
            context = result.context
        else:
            print(f"Failed: {result.error}")
    """

    def __init__(self, adapter: ComputeAdapter, config: ResizeConfig = None, logger=None,
                 sleep=asyncio.sleep, clock=time.monotonic):
        """
        Initialize operation.

        Args:
            adapter: Control-plane adapter
            config: Resize configuration (timeouts, poll interval)
            logger: Optional logger for debug output
            sleep: Coroutine function used between polls
            clock: Time source for poll timeouts
        """
        self.adapter = adapter
        self.config = config or ResizeConfig()
        self.logger = logger
        self.sleep = sleep
        self.clock = clock

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this operation.

        Used for display and logging.
        """
        pass

    @abstractmethod
    async def run(self, context: WorkflowContext):
        """
        Perform the operation.

        Args:
            context: Context produced by the previous stage

        Returns:
            tuple: (new WorkflowContext, result message)

        Raises:
            VolumeResizeError: On any failure
        """
        pass

    async def execute(self, context: WorkflowContext) -> OperationResult:
        """
        Run the operation and capture its outcome.

        Args:
            context: Context produced by the previous stage

        Returns:
            OperationResult with the new context or the error
        """
        self._log_debug(f"Executing {self.name}")
        start_time = self.clock()

        try:
            new_context, message = await self.run(context)
        except VolumeResizeError as e:
            self._log_error(f"{self.name} failed: {e}")
            return OperationResult(
                operation_name=self.name,
                success=False,
                message=f"{self.name} failed",
                error=e
            )

        duration = self.clock() - start_time
        self._log_debug(f"{self.name} finished in {duration:.2f}s")

        return OperationResult(
            operation_name=self.name,
            success=True,
            message=f"{message} ({duration:.0f}s)",
            context=new_context
        )

    def _log_debug(self, message: str):
        """Log debug message if logger available."""
        if self.logger:
            self.logger.debug(message)

    def _log_info(self, message: str):
        """Log info message if logger available."""
        if self.logger:
            self.logger.info(message)

    def _log_error(self, message: str):
        """Log error message if logger available."""
        if self.logger:
            self.logger.error(message)

    async def _poll(self, probe, description: str, timeout: float):
        """Run the poll engine with this operation's interval, clock and sleep."""
        return await poll_until(
            probe,
            description,
            timeout,
            interval=self.config.poll_interval,
            sleep=self.sleep,
            clock=self.clock,
            logger=self.logger
        )

    async def _wait_for_volume_state(self, volume_id: str, target_state: str,
                                     timeout: float) -> Volume:
        """
        Wait for a volume to reach a target state.

        Args:
            volume_id: Volume to watch
            target_state: State to wait for (e.g., 'available')
            timeout: Maximum seconds to wait

        Returns:
            The volume as last observed in the target state

        Raises:
            PollTimeoutError: If the state was not reached in time
        """

        async def check_state():
            volumes = await self.adapter.describe_volumes([volume_id])
            volume = volumes[0] if volumes else None
            current_state = volume.state if volume else None
            self._log_debug(f"Volume {volume_id} state: {current_state}, Target: {target_state}")
            return PollResult(current_state == target_state, volume)

        return await self._poll(check_state, f"volume {volume_id} to be {target_state}", timeout)

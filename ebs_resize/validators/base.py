"""
EBS Resize - Base Validator

This module provides the base class for all validators.
Each validator checks one thing and returns pass/fail.

A failed result carries the ValidationError describing why, so the
orchestrator can stop at the first failure and report it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ebs_resize.core.config import ResizeConfig
from ebs_resize.core.exceptions import ValidationError


@dataclass
class ValidationResult:
    """
    Result from a single validation check.

    Attributes:
        validator_name: Name of the validator (for display)
        passed: True if validation passed, False if failed
        message: Human-readable message about the result
        details: Optional dict with what the check found (zone, volume, device)
        error: The ValidationError when the check failed
    """
    validator_name: str
    passed: bool
    message: str
    details: Optional[dict] = None
    error: Optional[ValidationError] = None

    def __str__(self):
        """String representation of result."""
        status = "[OK]" if self.passed else "[X]"
        return f"{status} {self.validator_name}: {self.message}"


class ValidationResults:
    """
    Collection of validation results.

    Makes it easy to check if all validations passed and log results.
    """

    def __init__(self):
        """Initialize empty results."""
        self.results: List[ValidationResult] = []

    def add(self, result: ValidationResult):
        """Add a validation result."""
        self.results.append(result)

    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(r.passed for r in self.results)

    def get_failures(self) -> List[ValidationResult]:
        """Get only failed validations."""
        return [r for r in self.results if not r.passed]

    def log_failures(self, logger):
        """Log failed validations with their fix suggestions."""
        for result in self.get_failures():
            logger.error(f"  [X] {result.validator_name}: {result.message}")
            if result.error is not None and result.error.fix:
                logger.error(f"    Fix: {result.error.fix}")


class BaseValidator(ABC):
    """
    Base class for all validators.

    To create a new validator:
    1. Inherit from this class
    2. Implement the async validate() method
    3. Implement the name property

    Validators only read remote state. Running one twice against
    unchanged state gives the same outcome.

    Example:
        class MyValidator(BaseValidator):
            @property
            def name(self):
                return "My Check"

            async def validate(self):
                if all_good:
                    return self._pass("Everything is good")
                return self._fail(ValidationError(self.name, "Something is wrong"))
    """

    def __init__(self, adapter, config: ResizeConfig = None):
        """
        Initialize validator.

        Args:
            adapter: Control-plane adapter (None for checks that need no calls)
            config: Resize configuration
        """
        self.adapter = adapter
        self.config = config or ResizeConfig()

    @abstractmethod
    async def validate(self) -> ValidationResult:
        """
        Run the validation check.

        Returns:
            ValidationResult with pass/fail and message
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this validator.

        Used for display in validation results.
        """
        pass

    def _pass(self, message: str, **details) -> ValidationResult:
        """Build a passing result."""
        return ValidationResult(
            validator_name=self.name,
            passed=True,
            message=message,
            details=details
        )

    def _fail(self, error: ValidationError) -> ValidationResult:
        """Build a failing result from a validation error."""
        return ValidationResult(
            validator_name=self.name,
            passed=False,
            message=error.reason,
            error=error
        )

"""Running the stunnel config check from the config layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..common.exceptions import ConfigValidationError, StunnelManagerError
from .models import ValidationResult

if TYPE_CHECKING:
    from ..process.runner import ProcessRunner


def check_config(runner: ProcessRunner, config_path: str) -> ValidationResult:
    """Run the config check and fold every failure into a ValidationResult.

    A rejected config, a missing binary and a timed-out check all count as
    invalid; the diagnostic says which.
    """
    try:
        runner.validate_config(config_path)
    except ConfigValidationError as e:
        return ValidationResult(valid=False, diagnostic=e.diagnostic)
    except StunnelManagerError as e:
        return ValidationResult(valid=False, diagnostic=str(e))
    return ValidationResult(valid=True)

from __future__ import annotations

import logging
import subprocess

from resource_monitor.logging_utils import TRACE_LEVEL
from resource_monitor.outcome import Outcome

logger = logging.getLogger(__name__)

# Keeps each child tool from opening its own console window on Windows.
_CREATION_FLAGS = getattr(subprocess, "CREATE_NO_WINDOW", 0)


def run_command(command: list[str], timeout: float | None = None) -> Outcome[str]:
    """Run ``command`` to completion and return its stdout.

    A missing executable, a spawn error, a timeout and a non-zero exit status
    all come back as an unavailable outcome naming the command.
    """
    source = command[0]
    try:
        result = subprocess.run(
            command,
            check=False,
            text=True,
            errors="replace",
            capture_output=True,
            timeout=timeout,
            creationflags=_CREATION_FLAGS,
        )
    except FileNotFoundError:
        logger.debug("Command not found: %s", source)
        return Outcome.unavailable(source, "not found")
    except subprocess.TimeoutExpired:
        logger.debug("Command timed out after %ss: %s", timeout, " ".join(command))
        return Outcome.unavailable(source, f"timed out after {timeout}s")
    except OSError as exc:
        logger.debug("Command failed to start: %s (%s)", source, exc)
        return Outcome.unavailable(source, f"failed to start: {exc}")

    if result.returncode != 0:
        logger.debug("Command failed (%s): %s", result.returncode, " ".join(command))
        if result.stderr:
            logger.log(TRACE_LEVEL, "stderr: %s", result.stderr.strip())
        return Outcome.unavailable(source, f"exit status {result.returncode}")
    if result.stdout:
        logger.log(TRACE_LEVEL, "stdout: %s", result.stdout.strip())
    return Outcome.ok(result.stdout or "")

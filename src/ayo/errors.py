"""Exception types raised by agent resolution and validation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ayo.models.schema import Schema


class AyoError(Exception):
    """Base exception for all ayo errors."""


class ConfigError(AyoError):
    """The global configuration file could not be read or parsed."""


class AgentError(AyoError):
    """Base for agent-related errors."""


class AgentNotFoundError(AgentError):
    def __init__(self, handle: str) -> None:
        super().__init__(f"agent not found: {handle}")
        self.handle = handle


class AgentLoadError(AgentError):
    """An agent directory exists but its contents are malformed or unreadable."""

    def __init__(self, handle: str, path: Path, cause: BaseException) -> None:
        super().__init__(f"load {handle} from {path}: {cause}")
        self.handle = handle
        self.path = path
        self.cause = cause


class ReservedNamespaceError(AgentError, ValueError):
    def __init__(self, handle: str) -> None:
        super().__init__(f"agent name cannot use reserved 'ayo.' namespace: {handle}")
        self.handle = handle


class BundledInstallError(AgentError):
    """Installing the bundled default agents failed."""


class PayloadValidationError(AyoError):
    direction = "payload"

    def __init__(self, payload: str, cause: BaseException, schema: Schema) -> None:
        super().__init__(f"{self.direction} validation failed: {_cause_message(cause)}")
        self.payload = payload
        self.cause = cause
        self.schema = schema


class InputValidationError(PayloadValidationError):
    direction = "input"


class OutputValidationError(PayloadValidationError):
    direction = "output"


def _cause_message(cause: BaseException) -> str:
    message = getattr(cause, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(cause)

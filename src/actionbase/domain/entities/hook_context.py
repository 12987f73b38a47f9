"""Hook context and results for the hook system."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        app: The FastAPI application, when triggered from a running app.
        organization_id: Tenant the triggering operation belongs to.
        request_id: Correlation ID for logging and tracing.
    """

    app: Any = None
    organization_id: Optional[str] = None
    request_id: str = ""

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether all hooks executed successfully.
        errors: Error messages from hooks that failed.
        data: Data as returned by the last hook in the chain.
    """

    success: bool = True
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None

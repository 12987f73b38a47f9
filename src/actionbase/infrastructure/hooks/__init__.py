"""Infrastructure hooks module.

Contains built-in hooks and hook registration utilities.
"""

from actionbase.infrastructure.hooks.builtin_hooks import (
    BUILTIN_HOOKS,
    analytics_log_hook,
    register_builtin_hooks,
)

__all__ = [
    "BUILTIN_HOOKS",
    "analytics_log_hook",
    "register_builtin_hooks",
]

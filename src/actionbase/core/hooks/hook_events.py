"""Hook event definitions and categories.

Adding new events is non-breaking; removing or renaming one breaks every
plugin registered against it.
"""


class HookCategory:
    """Categories grouping related hook events."""

    APP_LIFECYCLE = "app_lifecycle"
    ACTION_COLLECTION_OPERATIONS = "action_collection_operations"
    ACTION_OPERATIONS = "action_operations"
    APPLICATION_OPERATIONS = "application_operations"


class HookEvent:
    """Hook event names.

    Naming pattern: ON_<SUBJECT>_<TIMING>_<OPERATION>. Only ``after`` events
    exist for entities; they fire once an operation has been persisted and
    feed the analytics pipeline.
    """

    # App Lifecycle Events
    ON_BOOTSTRAP = "on_bootstrap"
    ON_SERVE = "on_serve"
    ON_TERMINATE = "on_terminate"

    # Action Collection Operations
    ON_ACTION_COLLECTION_AFTER_CREATE = "on_action_collection_after_create"
    ON_ACTION_COLLECTION_AFTER_UPDATE = "on_action_collection_after_update"
    ON_ACTION_COLLECTION_AFTER_DELETE = "on_action_collection_after_delete"

    # Action Operations
    ON_ACTION_AFTER_CREATE = "on_action_after_create"
    ON_ACTION_AFTER_UPDATE = "on_action_after_update"
    ON_ACTION_AFTER_DELETE = "on_action_after_delete"

    # Application Operations
    ON_APPLICATION_AFTER_PUBLISH = "on_application_after_publish"


EVENT_CATEGORIES: dict[str, str] = {
    HookEvent.ON_BOOTSTRAP: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_SERVE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_TERMINATE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_ACTION_COLLECTION_AFTER_CREATE: HookCategory.ACTION_COLLECTION_OPERATIONS,
    HookEvent.ON_ACTION_COLLECTION_AFTER_UPDATE: HookCategory.ACTION_COLLECTION_OPERATIONS,
    HookEvent.ON_ACTION_COLLECTION_AFTER_DELETE: HookCategory.ACTION_COLLECTION_OPERATIONS,
    HookEvent.ON_ACTION_AFTER_CREATE: HookCategory.ACTION_OPERATIONS,
    HookEvent.ON_ACTION_AFTER_UPDATE: HookCategory.ACTION_OPERATIONS,
    HookEvent.ON_ACTION_AFTER_DELETE: HookCategory.ACTION_OPERATIONS,
    HookEvent.ON_APPLICATION_AFTER_PUBLISH: HookCategory.APPLICATION_OPERATIONS,
}


def get_all_events() -> list[str]:
    """Get all available hook event names."""
    return [
        value
        for name, value in vars(HookEvent).items()
        if not name.startswith("_") and isinstance(value, str)
    ]

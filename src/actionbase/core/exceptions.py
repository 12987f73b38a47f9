"""Error taxonomy shared by the services and the HTTP layer.

Every user-facing failure is an ``ActionBaseError`` carrying a message and
the HTTP status code the API layer responds with.
"""


class FieldName:
    """Field and resource names used in error messages."""

    ID = "id"
    NAME = "name"
    PAGE_ID = "page_id"
    APPLICATION_ID = "application_id"
    ORGANIZATION_ID = "organization_id"
    PLUGIN_ID = "plugin_id"
    PAGE = "page"
    ACTION = "action"
    ACTION_COLLECTION = "action_collection"


class ActionBaseError(Exception):
    """Base class for all ActionBase errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidParameterError(ActionBaseError):
    """Raised when a required field is missing or blank, or an identity
    field is supplied where the system must assign it."""

    status_code = 400

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Please enter a valid parameter {field}.")


class NoResourceFoundError(ActionBaseError):
    """Raised when a lookup by id returns nothing."""

    status_code = 404

    def __init__(self, resource: str, resource_id: str | None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Unable to find {resource} with id {resource_id}")


class DuplicateKeyUserError(ActionBaseError):
    """Raised when a uniqueness constraint is violated."""

    status_code = 409

    def __init__(self, value: str | None, field: str) -> None:
        self.value = value
        self.field = field
        super().__init__(f"{value} already exists. Please use a different {field}")

"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when neither the remote API nor the local store has an entity."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RemoteFailureError(Exception):
    """Raised by the gateway on transport errors and unsuccessful responses.

    Always absorbed by the fallback resolver; never reaches the UI raw.
    """

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        label = status_code if status_code is not None else "error"
        super().__init__(f"[remote] {label}: {message}")


class SessionExpiredError(RemoteFailureError):
    """Raised after a 401 once the session has been torn down."""

    def __init__(self, message: str = "Session expired"):
        super().__init__(401, message)

"""
Services module exceptions.
"""

from shared.exceptions import NotFoundError


class ServiceNotFoundError(NotFoundError):
    """Raised when no service matches an id."""

    def __init__(self, service_id: str):
        super().__init__(
            f"Service not found: {service_id}",
            code="SERVICE_NOT_FOUND",
            details={"service_id": service_id},
        )

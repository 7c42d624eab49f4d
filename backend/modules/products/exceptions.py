"""
Product module exceptions.
"""

from shared.exceptions import NotFoundError


class ProductNotFoundError(NotFoundError):
    """Raised when no product matches an id."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )

"""Catalog lookup errors."""

from topup_market.modules.common.exceptions import InactiveResourceError, NotFoundError


class ProductNotFoundError(NotFoundError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int) -> None:
        super().__init__(f"product not found: {product_id}", product_id=product_id)
        self.product_id = product_id


class ProductInactiveError(InactiveResourceError):
    code = "PRODUCT_INACTIVE"

    def __init__(self, product_id: int) -> None:
        super().__init__(f"product is not active: {product_id}", product_id=product_id)
        self.product_id = product_id


class UnknownCategoryError(NotFoundError):
    code = "CATEGORY_NOT_FOUND"

    def __init__(self, category: str) -> None:
        super().__init__(f"unknown service category: {category}", category=category)

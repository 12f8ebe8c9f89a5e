"""Stock reservation and release for orders.

Both functions run inside the caller's unit of work; the product changes
they stage commit together with the order that caused them.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import logger
from marketplace.shared.errors import OutOfStock, ProductNotFound


def reserve(lines):
    """Withdraw stock for ``lines``, a sequence of ``(product_id, quantity)``.

    Every line is checked before any product is touched: quantities for a
    product that appears on several lines are summed, and the first line that
    cannot be covered raises ``ProductNotFound`` or ``OutOfStock``.

    Returns a mapping of product id to the (already withdrawn) product.
    """
    repo = current_domain.repository_for(Product)

    products = {}
    wanted = {}
    for product_id, quantity in lines:
        product_id = str(product_id)
        if product_id not in products:
            try:
                product = repo.get(product_id)
            except ObjectNotFoundError:
                raise ProductNotFound(product_id) from None
            if not product.is_active:
                raise ProductNotFound(product_id)
            products[product_id] = product

        wanted[product_id] = wanted.get(product_id, 0) + quantity
        if not products[product_id].inventory.covers(wanted[product_id]):
            logger.warning(
                "Insufficient stock",
                product_id=product_id,
                requested=wanted[product_id],
                available=products[product_id].inventory.quantity,
            )
            raise OutOfStock(products[product_id].name)

    for product_id, product in products.items():
        product.withdraw_stock(wanted[product_id])
        repo.add(product)

    return products


def release(lines):
    """Put quantities back on the shelf for ``lines`` of ``(product_id, quantity)``.

    Products that no longer exist are skipped. Returns the ids that were
    restored.
    """
    repo = current_domain.repository_for(Product)

    totals = {}
    for product_id, quantity in lines:
        totals[str(product_id)] = totals.get(str(product_id), 0) + quantity

    restored = []
    for product_id, quantity in totals.items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.warning("Skipping stock restore for missing product", product_id=product_id)
            continue

        product.restore_stock(quantity)
        repo.add(product)
        restored.append(product_id)

    logger.info("Stock restored", products=len(restored))
    return restored

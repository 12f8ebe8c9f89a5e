"""Product management by its owner: details, stock counts and deactivation."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import logger, marketplace
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError, ProductNotFound


@marketplace.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    name = String(max_length=100)
    description = String(max_length=1000)
    price = Float(min_value=0.0)
    category = String(max_length=50)
    subcategory = String(max_length=50)
    unit = String(max_length=10)


@marketplace.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=0)


@marketplace.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)


def _owned_product(repo, product_id, caller):
    try:
        product = repo.get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id) from None

    if not caller.is_admin and str(product.seller_id) != caller.user_id:
        raise AuthorizationError("Not authorized to modify this product")
    return product


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProductDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, Caller.of(command.actor_id, command.actor_role))
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            subcategory=command.subcategory,
            unit=command.unit,
        )
        repo.add(product)

    @handle(RestockProduct)
    def restock(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, Caller.of(command.actor_id, command.actor_role))
        product.restock(command.quantity)
        repo.add(product)

        logger.info("Product restocked", product_id=str(product.id), quantity=command.quantity)

    @handle(DeactivateProduct)
    def deactivate(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, Caller.of(command.actor_id, command.actor_role))
        product.deactivate()
        repo.add(product)

        logger.info("Product deactivated", product_id=str(product.id))

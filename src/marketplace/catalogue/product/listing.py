"""Product listing: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product.product import Product
from marketplace.domain import logger, marketplace
from marketplace.shared.access import Caller
from marketplace.shared.errors import AuthorizationError


@marketplace.command(part_of="Product")
class CreateProduct:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=1000)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50)
    subcategory = String(max_length=50)
    quantity = Integer(required=True, min_value=0)
    unit = String(required=True, max_length=10)


@marketplace.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        caller = Caller.of(command.actor_id, command.actor_role)
        if not (caller.is_seller or caller.is_admin):
            raise AuthorizationError("Only artisans, sellers and admins can list products")

        product = Product.create(
            seller_id=caller.user_id,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            subcategory=command.subcategory,
            quantity=command.quantity,
            unit=command.unit,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product listed", product_id=str(product.id), seller_id=caller.user_id)
        return str(product.id)

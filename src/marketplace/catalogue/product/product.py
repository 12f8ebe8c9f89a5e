"""Product aggregate root and its Inventory value object."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from marketplace.catalogue.product.events import (
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductListed,
    StockRestocked,
    StockRestored,
    StockWithdrawn,
)
from marketplace.domain import marketplace


class ProductCategory(Enum):
    FRESH_FOOD = "fresh-food"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    DAIRY = "dairy"
    MEAT = "meat"
    HANDMADE_CRAFTS = "handmade-crafts"
    TEXTILES = "textiles"
    POTTERY = "pottery"
    JEWELRY = "jewelry"
    WOODWORK = "woodwork"
    LOCAL_ART = "local-art"
    PAINTINGS = "paintings"
    SCULPTURES = "sculptures"
    PHOTOGRAPHY = "photography"
    OTHER = "other"


class InventoryUnit(Enum):
    KG = "kg"
    G = "g"
    LB = "lb"
    PIECE = "piece"
    DOZEN = "dozen"
    LITER = "liter"
    ML = "ml"
    BUNCH = "bunch"
    BAG = "bag"


@marketplace.value_object(part_of="Product")
class Inventory:
    """Stock on hand for a product.

    ``in_stock`` is derived from ``quantity``; build instances with
    ``Inventory.of`` or the ``withdrawn``/``restored``/``restocked`` helpers
    rather than passing it by hand.
    """

    quantity = Integer(required=True, min_value=0)
    unit = String(required=True, choices=InventoryUnit)
    in_stock = Boolean(default=False)

    @invariant.post
    def in_stock_must_match_quantity(self):
        if self.in_stock != (self.quantity > 0):
            raise ValidationError({"inventory": ["In-stock flag must reflect whether quantity is above zero"]})

    @classmethod
    def of(cls, quantity, unit):
        return cls(quantity=quantity, unit=unit, in_stock=quantity > 0)

    def covers(self, quantity):
        return self.in_stock and self.quantity >= quantity

    def withdrawn(self, quantity):
        if not self.covers(quantity):
            raise ValidationError({"inventory": [f"Cannot withdraw {quantity} from {self.quantity} on hand"]})
        return Inventory.of(self.quantity - quantity, self.unit)

    def restored(self, quantity):
        return Inventory.of(self.quantity + quantity, self.unit)

    def restocked(self, quantity):
        return Inventory.of(quantity, self.unit)


@marketplace.aggregate
class Product:
    """A listing offered by an artisan or seller."""

    seller_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=1000)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, choices=ProductCategory)
    subcategory = String(max_length=50)
    inventory = ValueObject(Inventory, required=True)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, seller_id, name, description, price, category, quantity, unit, subcategory=None):
        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            name=name,
            description=description,
            price=price,
            category=category,
            subcategory=subcategory,
            inventory=Inventory.of(quantity, unit),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                price=price,
                quantity=quantity,
                listed_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, subcategory=None, unit=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if subcategory is not None:
            self.subcategory = subcategory
        if unit is not None:
            self.inventory = Inventory.of(self.inventory.quantity, unit)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category=self.category,
            )
        )

    def withdraw_stock(self, quantity):
        """Take ``quantity`` units off the shelf for an order."""
        self.inventory = self.inventory.withdrawn(quantity)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockWithdrawn(
                product_id=self.id,
                quantity=quantity,
                remaining=self.inventory.quantity,
            )
        )

    def restore_stock(self, quantity):
        """Put units from a cancelled or returned order back on the shelf."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Restored quantity must be at least 1"]})

        self.inventory = self.inventory.restored(quantity)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockRestored(
                product_id=self.id,
                quantity=quantity,
                remaining=self.inventory.quantity,
            )
        )

    def restock(self, quantity):
        """Set the quantity on hand, as counted by the seller."""
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        previous = self.inventory.quantity
        self.inventory = self.inventory.restocked(quantity)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockRestocked(
                product_id=self.id,
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=now))

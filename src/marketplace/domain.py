"""Marketplace domain: catalogue inventory and the order lifecycle.

Products and orders live in one domain so that a checkout can reserve stock
on several products and record the order inside a single unit of work.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

marketplace = Domain(name="marketplace")

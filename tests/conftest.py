import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _marketplace_domain(request):
    """Initialize the marketplace domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


@pytest.fixture(autouse=True)
def run_around_tests(_marketplace_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _marketplace_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Callers
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer():
    from marketplace.shared.access import Caller, Role

    return Caller(user_id="cust-001", role=Role.CUSTOMER)


@pytest.fixture()
def other_customer():
    from marketplace.shared.access import Caller, Role

    return Caller(user_id="cust-002", role=Role.CUSTOMER)


@pytest.fixture()
def artisan():
    from marketplace.shared.access import Caller, Role

    return Caller(user_id="artisan-001", role=Role.ARTISAN)


@pytest.fixture()
def other_seller():
    from marketplace.shared.access import Caller, Role

    return Caller(user_id="seller-002", role=Role.SELLER)


@pytest.fixture()
def admin():
    from marketplace.shared.access import Caller, Role

    return Caller(user_id="admin-001", role=Role.ADMIN)


# ---------------------------------------------------------------------------
# Catalogue data
# ---------------------------------------------------------------------------
@pytest.fixture()
def list_product(artisan):
    """Factory: list a product through the command pipeline and return it."""
    from protean import current_domain

    from marketplace.catalogue.product.listing import CreateProduct
    from marketplace.catalogue.product.product import Product

    def _list(name="Wildflower Honey", price=10.0, quantity=20, seller=None, **overrides):
        seller = seller or artisan
        fields = {
            "actor_id": seller.user_id,
            "actor_role": seller.role.value,
            "name": name,
            "description": f"{name} from the farm",
            "price": price,
            "category": "fresh-food",
            "quantity": quantity,
            "unit": "piece",
        }
        fields.update(overrides)
        product_id = current_domain.process(CreateProduct(**fields), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _list


@pytest.fixture()
def shipping_address():
    return {
        "name": "Ada Farmer",
        "street": "12 Mill Lane",
        "city": "Fairview",
        "state": "OR",
        "zip_code": "97024",
        "country": "US",
    }


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client(_marketplace_domain):
    from fastapi import FastAPI, Request
    from fastapi.testclient import TestClient

    from marketplace.catalogue.api import product_router
    from marketplace.ordering.api import router as order_router
    from marketplace.shared.http import register_exception_handlers

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with _marketplace_domain.domain_context():
            return await call_next(request)

    app.include_router(product_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)
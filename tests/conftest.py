from datetime import datetime

import pytest

from backoffice.catalog import MenuCatalog
from backoffice.data import ACCOUNT_DIRECTORY, seed_menu_items, seed_orders
from backoffice.ledger import OrderLedger
from backoffice.session import AuthGate

FIXED_NOW = datetime(2024, 5, 17, 19, 30)

ADMIN_EMAIL = "admin@restaurant.com"
ADMIN_PASSWORD = "admin123"
STAFF_EMAIL = "staff@restaurant.com"
STAFF_PASSWORD = "staff123"


@pytest.fixture
def gate():
    return AuthGate(ACCOUNT_DIRECTORY)


@pytest.fixture
def admin_gate(gate):
    gate.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD)
    return gate


@pytest.fixture
def staff_gate(gate):
    gate.authenticate(STAFF_EMAIL, STAFF_PASSWORD)
    return gate


@pytest.fixture
def catalog(gate):
    return MenuCatalog(gate, seed_menu_items(), id_clock=lambda: 1_700_000_000_000)


@pytest.fixture
def ledger(gate):
    return OrderLedger(gate, seed_orders(FIXED_NOW), clock=lambda: FIXED_NOW)

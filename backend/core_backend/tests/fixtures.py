"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, catalog items, discounts, orders and marketplace providers.
"""
import base64
import pytest
from decimal import Decimal

from django.contrib.auth import get_user_model

from menu.models import Tax, MenuCategory, MenuGroup, MenuItem, ModifierGroup, Modifier, MenuItemModifierGroup
from orders.models import Order
from discounts.models import Discount
from integrations.models import IntegrationProvider, IntegrationStore


# 32 random-looking bytes, base64 encoded, the format the marketplace issues
TEST_SIGNING_SECRET = base64.b64encode(b"0123456789abcdef0123456789abcdef").decode()


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def staff_user(db):
    """Create a staff user allowed through IsAdminUser"""
    return get_user_model().objects.create_user(
        username='manager',
        password='password123',
        is_staff=True,
    )


@pytest.fixture
def regular_user(db):
    """Create a non-staff user"""
    return get_user_model().objects.create_user(
        username='cashier',
        password='password123',
    )


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def sales_tax(db):
    """Create an 8% sales tax"""
    return Tax.objects.create(name='Sales Tax', rate=Decimal('0.08000'))


@pytest.fixture
def category(db):
    """Create a visible menu category"""
    return MenuCategory.objects.create(name='Burgers', sort_order=1)


@pytest.fixture
def group(category):
    """Create a group inside the burgers category"""
    return MenuGroup.objects.create(category=category, name='Classics', sort_order=1)


@pytest.fixture
def burger(category, group, sales_tax):
    """Create a 100.00 taxable item"""
    return MenuItem.objects.create(
        category=category,
        group=group,
        name='House Burger',
        sku='BRG-001',
        barcode='0001112223334',
        price=Decimal('100.00'),
        tax=sales_tax,
    )


@pytest.fixture
def fries(category, sales_tax):
    """Create an item with a category but no group"""
    return MenuItem.objects.create(
        category=category,
        name='Fries',
        sku='FRY-001',
        price=Decimal('4.50'),
        tax=sales_tax,
    )


@pytest.fixture
def cheese_group(burger):
    """Create an optional modifier group linked to the burger"""
    modifier_group = ModifierGroup.objects.create(name='Cheese', min_required=0, max_allowed=2)
    Modifier.objects.create(group=modifier_group, name='Cheddar', price=Decimal('1.25'), sort_order=1)
    Modifier.objects.create(group=modifier_group, name='Swiss', price=Decimal('1.50'), sort_order=2)
    Modifier.objects.create(group=modifier_group, name='Retired', price=Decimal('9.99'), active=False)
    MenuItemModifierGroup.objects.create(menu_item=burger, group=modifier_group, sort_order=1)
    return modifier_group


# ============================================================================
# DISCOUNT FIXTURES
# ============================================================================

@pytest.fixture
def ten_percent_off(db):
    """Create a 10% discount definition"""
    return Discount.objects.create(
        name='Ten Off', type=Discount.DiscountType.PERCENT, value=Decimal('10.00')
    )


@pytest.fixture
def five_dollars_off(db):
    """Create a 5.00 flat discount definition"""
    return Discount.objects.create(
        name='Five Off', type=Discount.DiscountType.FLAT, value=Decimal('5.00')
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def order(db):
    """Create an empty OPEN order"""
    return Order.objects.create()


# ============================================================================
# INTEGRATION FIXTURES
# ============================================================================

@pytest.fixture
def doordash_provider(db):
    """Create an enabled DoorDash provider with signing credentials"""
    return IntegrationProvider.objects.create(
        code='DOORDASH',
        name='DoorDash',
        enabled=True,
        settings={
            'version': 1,
            'developer_id': 'dev-123',
            'key_id': 'key-456',
            'signing_secret': TEST_SIGNING_SECRET,
            'menu_name': 'Main Menu',
        },
    )


@pytest.fixture
def doordash_store(doordash_provider):
    """Create a store mapped to merchant supplied id 'store-1'"""
    return IntegrationStore.objects.create(
        provider=doordash_provider,
        name='Downtown',
        merchant_supplied_id='store-1',
    )

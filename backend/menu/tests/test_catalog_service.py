import pytest
from decimal import Decimal

from menu.models import MenuCategory, MenuItem
from menu.services import CatalogService


@pytest.mark.django_db
class TestPlaceholderItem:
    def test_created_hidden_and_free(self):
        item = CatalogService.ensure_placeholder_item()

        assert item.name == "Online Order Item"
        assert item.price == Decimal("0.00")
        assert item.visible is False
        assert item.group.visible is False
        assert item.category.visible is False

    def test_idempotent(self):
        first = CatalogService.ensure_placeholder_item()
        second = CatalogService.ensure_placeholder_item()

        assert first.pk == second.pk
        assert MenuItem.objects.filter(name="Online Order Item").count() == 1

    def test_rehides_a_category_made_visible(self):
        CatalogService.ensure_placeholder_item()
        MenuCategory.objects.filter(name="Online Orders").update(visible=True)

        item = CatalogService.ensure_placeholder_item()

        item.category.refresh_from_db()
        assert item.category.visible is False

    def test_resolvable_items_include_hidden(self, burger):
        placeholder = CatalogService.ensure_placeholder_item()

        assert set(CatalogService.resolvable_items()) == {burger, placeholder}

import logging
from decimal import Decimal

from django.db import transaction

from .models import MenuCategory, MenuGroup, MenuItem

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Read helpers over the menu catalog used by the order ingestion and menu
    export paths.
    """

    PLACEHOLDER_CATEGORY_NAME = "Online Orders"
    PLACEHOLDER_GROUP_NAME = "Online Items"
    PLACEHOLDER_ITEM_NAME = "Online Order Item"

    @staticmethod
    @transaction.atomic
    def ensure_placeholder_item() -> MenuItem:
        """
        Return the hidden, zero-priced catalog item used when an external line
        cannot be resolved, creating its category and group on first use.

        The category and group are forced hidden so the placeholder never
        leaks into a menu export.
        """
        category, created = MenuCategory.objects.get_or_create(
            name=CatalogService.PLACEHOLDER_CATEGORY_NAME,
            defaults={"sort_order": 999, "visible": False},
        )
        if not created and category.visible:
            category.visible = False
            category.save(update_fields=["visible"])

        group, created = MenuGroup.objects.get_or_create(
            category=category,
            name=CatalogService.PLACEHOLDER_GROUP_NAME,
            defaults={"sort_order": 1, "visible": False},
        )
        if not created and group.visible:
            group.visible = False
            group.save(update_fields=["visible"])

        item = MenuItem.objects.filter(
            group=group, name=CatalogService.PLACEHOLDER_ITEM_NAME
        ).first()
        if item is None:
            item = MenuItem.objects.create(
                name=CatalogService.PLACEHOLDER_ITEM_NAME,
                price=Decimal("0.00"),
                visible=False,
                category=category,
                group=group,
            )
            logger.info(f"Created online placeholder menu item {item.id}")
        return item

    @staticmethod
    def resolvable_items():
        """All catalog items an external line may resolve to, hidden ones included."""
        return list(MenuItem.objects.select_related("tax").all())

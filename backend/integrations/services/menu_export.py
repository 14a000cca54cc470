"""
Export of the internal menu catalog in the marketplace's menu schema.

The catalog hierarchy

    category -> group -> item -> modifier group -> modifier

becomes

    store -> menus -> categories -> items -> option_groups -> options

where every visible group is exported as a marketplace category. Items that
belong to a category but to no group are collected into a pseudo-group named
after the category and placed first among that category's groups.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Prefetch

from menu.models import MenuCategory, MenuGroup, MenuItem, MenuItemModifierGroup, Modifier
from payments.money import to_minor
from ..config import ProviderSettings, StoreSettings
from ..exceptions import IntegrationConfigurationError, StoreNotMappedError
from ..models import IntegrationProvider, IntegrationStore
from ..repositories import DjangoIntegrationRepository
from .doordash_client import DoorDashClient

logger = logging.getLogger(__name__)

WEEK_DAYS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")
DEFAULT_MENU_REFERENCE = "pos-menu"
DEFAULT_MENU_NAME = "POS Menu"
DEFAULT_PROVIDER_TYPE = "merchant"


def default_open_hours() -> List[Dict[str, str]]:
    return [
        {"day_index": day, "start_time": "00:00", "end_time": "23:59"}
        for day in WEEK_DAYS
    ]


def load_export_catalog() -> List[MenuCategory]:
    """
    Visible categories with their visible groups, visible items and active
    modifiers prefetched onto ``export_groups``, ``export_items``,
    ``loose_items``, ``export_links`` and ``active_modifiers``.
    """
    links = MenuItemModifierGroup.objects.select_related("group").prefetch_related(
        Prefetch(
            "group__modifiers",
            queryset=Modifier.objects.filter(active=True).order_by("sort_order", "name"),
            to_attr="active_modifiers",
        )
    ).order_by("sort_order")
    items = MenuItem.objects.filter(visible=True).order_by("name").prefetch_related(
        Prefetch("item_modifier_groups", queryset=links, to_attr="export_links")
    )

    return list(
        MenuCategory.objects.filter(visible=True)
        .order_by("sort_order", "name")
        .prefetch_related(
            Prefetch(
                "groups",
                queryset=MenuGroup.objects.filter(visible=True)
                .order_by("sort_order", "name")
                .prefetch_related(Prefetch("items", queryset=items, to_attr="export_items")),
                to_attr="export_groups",
            ),
            Prefetch("items", queryset=items.filter(group__isnull=True), to_attr="loose_items"),
        )
    )


class MenuExportBuilder:
    """Pure transform from a prefetched catalog to the marketplace payload."""

    def __init__(self, provider_settings: ProviderSettings, currency: Optional[str] = None):
        self.provider_settings = provider_settings
        self.currency = currency or settings.DEFAULT_CURRENCY

    def map_option_group(self, link) -> Dict[str, Any]:
        group = link.group
        modifiers = getattr(group, "active_modifiers", None)
        if modifiers is None:
            modifiers = [m for m in group.modifiers.all() if m.active]

        min_options = link.min_required
        if min_options is None:
            min_options = group.min_required if group.min_required is not None else 0
        max_options = link.max_allowed
        if max_options is None:
            max_options = (
                group.max_allowed if group.max_allowed is not None else max(len(modifiers), 1)
            )

        return {
            "id": str(group.id),
            "merchant_supplied_id": str(group.id),
            "name": group.name,
            "min_num_options": min_options,
            "max_num_options": max_options,
            "options": [
                {
                    "id": str(modifier.id),
                    "merchant_supplied_id": str(modifier.id),
                    "name": modifier.name,
                    "price": to_minor(self.currency, modifier.price),
                    "active": modifier.active,
                }
                for modifier in modifiers
            ],
        }

    def map_item(self, item) -> Dict[str, Any]:
        links = getattr(item, "export_links", None)
        if links is None:
            links = list(item.item_modifier_groups.select_related("group"))
        return {
            "id": str(item.id),
            "merchant_supplied_id": item.sku or item.barcode or str(item.id),
            "name": item.name,
            "description": item.description or "",
            "price": to_minor(self.currency, item.price),
            "active": item.visible,
            "option_groups": [self.map_option_group(link) for link in links],
        }

    def map_categories(self, categories: Iterable[Any]) -> List[Dict[str, Any]]:
        exported = []
        for category in categories:
            groups = [
                {
                    "id": str(group.id),
                    "merchant_supplied_id": str(group.id),
                    "name": group.name,
                    "items": [self.map_item(item) for item in group.export_items],
                }
                for group in category.export_groups
            ]
            if category.loose_items:
                pseudo_id = f"{category.id}-items"
                groups.insert(
                    0,
                    {
                        "id": pseudo_id,
                        "merchant_supplied_id": pseudo_id,
                        "name": category.name,
                        "items": [self.map_item(item) for item in category.loose_items],
                    },
                )
            exported.extend(groups)
        return exported

    def build(self, store, categories: Iterable[Any]) -> Dict[str, Any]:
        config = self.provider_settings
        menu_name = config.menu_name or DEFAULT_MENU_NAME
        menu_id = StoreSettings.from_dict(store.settings).menu_id

        menu = {
            "reference": config.menu_reference or DEFAULT_MENU_REFERENCE,
            "open_hours": config.open_hours or default_open_hours(),
            "special_hours": config.special_hours or [],
            "menu": {
                "name": menu_name,
                "subtitle": menu_name,
                "merchant_supplied_id": store.merchant_supplied_id,
                "active": True,
                "categories": self.map_categories(categories),
            },
        }
        if menu_id:
            menu = {"id": menu_id, **menu}

        return {
            "store": {
                "merchant_supplied_id": store.merchant_supplied_id,
                "provider_type": config.provider_type or DEFAULT_PROVIDER_TYPE,
            },
            "menus": [menu],
        }


class MenuExportService:
    """Builds and pushes menus for mapped stores."""

    @staticmethod
    def _provider(provider: Optional[IntegrationProvider] = None) -> IntegrationProvider:
        return provider or DjangoIntegrationRepository().get_provider(settings.DOORDASH_PROVIDER_CODE)

    @staticmethod
    def build_menu(merchant_supplied_id: str, provider: Optional[IntegrationProvider] = None) -> Dict[str, Any]:
        """
        Raises:
            StoreNotMappedError: If no store row maps ``merchant_supplied_id``.
        """
        provider = MenuExportService._provider(provider)
        store = IntegrationStore.objects.filter(
            provider=provider, merchant_supplied_id=merchant_supplied_id
        ).first()
        if store is None:
            raise StoreNotMappedError(merchant_supplied_id)

        builder = MenuExportBuilder(provider.get_settings())
        return builder.build(store, load_export_catalog())

    @staticmethod
    def find_store(store_id=None, merchant_supplied_id=None, provider=None) -> IntegrationStore:
        """
        Raises:
            IntegrationStore.DoesNotExist: If no such store exists for the provider.
        """
        provider = MenuExportService._provider(provider)
        if store_id:
            return IntegrationStore.objects.get(pk=store_id, provider=provider)
        return IntegrationStore.objects.get(
            provider=provider, merchant_supplied_id=str(merchant_supplied_id)
        )

    @staticmethod
    def push_menu(store: IntegrationStore, client: Optional[DoorDashClient] = None) -> Dict[str, Any]:
        """
        Push the store's menu and remember the menu id the marketplace assigns.

        Raises:
            IntegrationConfigurationError: If the provider is disabled or its
                credentials are incomplete.
            MarketplaceAPIError: If the marketplace rejects the push.
        """
        provider = store.provider
        if not provider.enabled:
            raise IntegrationConfigurationError(
                provider.code, message="DoorDash integration is disabled."
            )

        provider_settings = provider.get_settings()
        client = client or DoorDashClient(provider_settings)
        payload = MenuExportBuilder(provider_settings).build(store, load_export_catalog())
        data = client.push_menu(payload)

        menu_id = None
        if isinstance(data, dict):
            menu_id = data.get("menu_id") or data.get("menuId")
        if menu_id:
            with transaction.atomic():
                store = IntegrationStore.objects.select_for_update().get(pk=store.pk)
                store_settings = store.get_settings()
                store_settings.menu_id = str(menu_id)
                store.set_settings(store_settings)
                store.save(update_fields=["settings", "updated_at"])
            logger.info(f"Stored menu id {menu_id} for store {store.merchant_supplied_id}")
        return data

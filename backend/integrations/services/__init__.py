"""
Integration services package.

- ItemMatcher: resolves external lines to catalog items
- ExternalOrderNormalizer: raw marketplace payload -> OrderDraft
- IntegrationOrderRegistry: idempotent upsert keyed by (provider, external id)
- WebhookEventRouter: dispatches inbound webhook events by type
- KitchenDispatchTrigger: sends a released order to the kitchen once
- MenuExportBuilder / MenuExportService: catalog -> marketplace menu schema
- DoorDashClient: signed outbound marketplace API calls
"""

from .matcher import ItemMatcher
from .normalizer import ExternalOrderNormalizer
from .registry import IntegrationOrderRegistry
from .dispatch import KitchenDispatchTrigger
from .webhooks import WebhookEventRouter, WebhookEventType
from .menu_export import MenuExportBuilder, MenuExportService
from .doordash_client import DoorDashClient

__all__ = [
    "ItemMatcher",
    "ExternalOrderNormalizer",
    "IntegrationOrderRegistry",
    "KitchenDispatchTrigger",
    "WebhookEventRouter",
    "WebhookEventType",
    "MenuExportBuilder",
    "MenuExportService",
    "DoorDashClient",
]

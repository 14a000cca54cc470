from .admin import IntegrationOrderViewSet, IntegrationProviderViewSet, IntegrationStoreViewSet
from .doordash import DoorDashMenuPullView, DoorDashMenuPushView, DoorDashStoreDetailsView
from .webhooks import DoorDashWebhookView

__all__ = [
    "IntegrationOrderViewSet",
    "IntegrationProviderViewSet",
    "IntegrationStoreViewSet",
    "DoorDashMenuPullView",
    "DoorDashMenuPushView",
    "DoorDashStoreDetailsView",
    "DoorDashWebhookView",
]

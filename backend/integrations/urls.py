from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .services.webhooks import WebhookEventType
from .views import (
    DoorDashMenuPullView,
    DoorDashMenuPushView,
    DoorDashStoreDetailsView,
    DoorDashWebhookView,
    IntegrationOrderViewSet,
    IntegrationProviderViewSet,
    IntegrationStoreViewSet,
)

app_name = "integrations"

router = DefaultRouter()
router.register(r"providers", IntegrationProviderViewSet, basename="provider")
router.register(r"stores", IntegrationStoreViewSet, basename="store")
router.register(r"orders", IntegrationOrderViewSet, basename="order")

WEBHOOK_ROUTES = {
    "orders": WebhookEventType.ORDER,
    "menu-status": WebhookEventType.MENU_STATUS,
    "order-release": WebhookEventType.ORDER_RELEASE,
    "order-canceled": WebhookEventType.ORDER_CANCELED,
    "dasher-status": WebhookEventType.DASHER_STATUS,
}

urlpatterns = [
    path("", include(router.urls)),
    path(
        "doordash/menu/<str:merchant_supplied_id>/",
        DoorDashMenuPullView.as_view(),
        name="doordash-menu-pull",
    ),
    path(
        "doordash/menus/push/",
        DoorDashMenuPushView.as_view(),
        name="doordash-menu-push",
    ),
    path(
        "doordash/stores/<str:merchant_supplied_id>/details/",
        DoorDashStoreDetailsView.as_view(),
        name="doordash-store-details",
    ),
] + [
    path(
        f"doordash/webhooks/{route}/",
        DoorDashWebhookView.as_view(event_type=event_type),
        name=f"doordash-webhook-{route}",
    )
    for route, event_type in WEBHOOK_ROUTES.items()
]

from rest_framework import mixins, viewsets
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from core_backend.base.mixins import OptimizedQuerysetMixin
from ..filters import IntegrationOrderFilter
from ..models import IntegrationOrder, IntegrationProvider, IntegrationStore
from ..serializers import (
    IntegrationOrderSerializer,
    IntegrationProviderSerializer,
    IntegrationStoreSerializer,
)

DEFAULT_ORDER_LIMIT = 100
MAX_ORDER_LIMIT = 200


class IntegrationProviderViewSet(BaseViewSet):
    """Staff CRUD for marketplace providers. Deleting is not supported."""

    queryset = IntegrationProvider.objects.all()
    serializer_class = IntegrationProviderSerializer
    http_method_names = ["get", "post", "patch", "head", "options"]
    pagination_class = None


class IntegrationStoreViewSet(BaseViewSet):
    queryset = IntegrationStore.objects.all()
    serializer_class = IntegrationStoreSerializer
    http_method_names = ["get", "post", "patch", "head", "options"]
    filterset_fields = ["provider", "active"]
    pagination_class = None


class IntegrationOrderViewSet(
    OptimizedQuerysetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Newest-first log of external orders.

    ``limit`` caps the list (default 100, at most 200) in place of page
    numbers.
    """

    queryset = IntegrationOrder.objects.all().order_by("-created_at")
    serializer_class = IntegrationOrderSerializer
    filterset_class = IntegrationOrderFilter

    def get_limit(self):
        raw = self.request.query_params.get("limit")
        if not raw:
            return DEFAULT_ORDER_LIMIT
        try:
            limit = int(raw)
        except ValueError:
            return DEFAULT_ORDER_LIMIT
        if limit <= 0:
            return DEFAULT_ORDER_LIMIT
        return min(limit, MAX_ORDER_LIMIT)

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())[: self.get_limit()]
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

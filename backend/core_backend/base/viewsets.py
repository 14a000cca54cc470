from rest_framework import viewsets
from django_filters.rest_framework import DjangoFilterBackend
from .mixins import OptimizedQuerysetMixin
from ..pagination import StandardPagination


class BaseViewSet(OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Automatic query optimization via OptimizedQuerysetMixin
    - Standard pagination and filtering

    Usage:
        class IntegrationStoreViewSet(BaseViewSet):
            queryset = IntegrationStore.objects.all()
            serializer_class = IntegrationStoreSerializer
    """

    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend]

    def get_queryset(self):
        """Re-evaluate the class-level queryset on every request."""
        if getattr(self, "queryset", None) is not None:
            self.queryset = self.queryset.all()
        return super().get_queryset()


class ReadOnlyBaseViewSet(OptimizedQuerysetMixin, viewsets.ReadOnlyModelViewSet):
    """Base ViewSet for read-only endpoints."""

    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend]

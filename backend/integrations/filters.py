import django_filters

from .models import IntegrationOrder


class IntegrationOrderFilter(django_filters.FilterSet):
    """
    Filters for the integration order log.

    ``provider`` matches the provider code case-insensitively; ``status``
    accepts a comma-separated list of provider statuses.
    """

    provider = django_filters.CharFilter(method="filter_provider")
    status = django_filters.CharFilter(method="filter_status")

    class Meta:
        model = IntegrationOrder
        fields = ["provider", "status", "store"]

    def filter_provider(self, queryset, name, value):
        return queryset.filter(provider__code=value.strip().upper())

    def filter_status(self, queryset, name, value):
        statuses = [part.strip().upper() for part in value.split(",") if part.strip()]
        if not statuses:
            return queryset
        return queryset.filter(status__in=statuses)

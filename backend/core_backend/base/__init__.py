"""
Core backend base components.

Foundational classes that the apps build their API layer on.
"""

from .viewsets import BaseViewSet, ReadOnlyBaseViewSet
from .serializers import BaseModelSerializer, TimestampedSerializer
from .mixins import OptimizedQuerysetMixin

__all__ = [
    'BaseViewSet',
    'ReadOnlyBaseViewSet',
    'BaseModelSerializer',
    'TimestampedSerializer',
    'OptimizedQuerysetMixin',
]

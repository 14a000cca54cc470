from rest_framework import status
from rest_framework.response import Response

from ..exceptions import (
    IntegrationConfigurationError,
    MarketplaceAPIError,
    StoreNotMappedError,
)


def integration_error_response(exc):
    """
    Map an integration exception to the response the caller should see.
    Marketplace errors pass the marketplace's status and body through.
    """
    if isinstance(exc, MarketplaceAPIError):
        return Response(exc.body, status=exc.status_code)
    if isinstance(exc, (IntegrationConfigurationError, StoreNotMappedError)):
        return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

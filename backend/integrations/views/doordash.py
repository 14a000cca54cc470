import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import IntegrationError, StoreNotMappedError
from ..models import IntegrationStore
from ..repositories import DjangoIntegrationRepository
from ..services.doordash_client import DoorDashClient
from ..services.menu_export import MenuExportService
from .base import integration_error_response

logger = logging.getLogger(__name__)


class DoorDashMenuPullView(APIView):
    """
    Menu pull endpoint the marketplace calls for a mapped store.

    ``?ids=`` may restrict the pull to specific menu ids; a store whose menu
    id is not among them answers 404.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, merchant_supplied_id):
        try:
            payload = MenuExportService.build_menu(merchant_supplied_id)
        except StoreNotMappedError as e:
            logger.warning(f"Menu pull for unmapped store '{merchant_supplied_id}'")
            return integration_error_response(e)

        ids = request.query_params.get("ids")
        if ids:
            requested = [part.strip() for part in ids.split(",") if part.strip()]
            menu_id = payload["menus"][0].get("id")
            if requested and menu_id and menu_id not in requested:
                return Response({"error": "Menu id not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(payload)


class DoorDashMenuPushView(APIView):
    """Build the menu for one store and push it to the marketplace."""

    def post(self, request):
        store_id = request.data.get("store_id")
        merchant_supplied_id = request.data.get("merchant_supplied_id")

        provider = DjangoIntegrationRepository().get_provider(settings.DOORDASH_PROVIDER_CODE)
        if not provider.enabled:
            return Response(
                {"error": "DoorDash integration is disabled."}, status=status.HTTP_400_BAD_REQUEST
            )
        if not store_id and not merchant_supplied_id:
            return Response(
                {"error": "store_id or merchant_supplied_id required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            store = MenuExportService.find_store(
                store_id=store_id, merchant_supplied_id=merchant_supplied_id, provider=provider
            )
        except (IntegrationStore.DoesNotExist, ValueError):
            return Response({"error": "Store not found."}, status=status.HTTP_404_NOT_FOUND)

        try:
            data = MenuExportService.push_menu(store)
        except IntegrationError as e:
            return integration_error_response(e)
        return Response(data)


class DoorDashStoreDetailsView(APIView):
    """Read or update the marketplace-side details of a mapped store."""

    def _client_for(self, merchant_supplied_id):
        repository = DjangoIntegrationRepository()
        provider = repository.get_provider(settings.DOORDASH_PROVIDER_CODE)
        if repository.find_store(provider, merchant_supplied_id) is None:
            raise StoreNotMappedError(merchant_supplied_id)
        return DoorDashClient(provider.get_settings())

    def get(self, request, merchant_supplied_id):
        try:
            data = self._client_for(merchant_supplied_id).get_store_details(merchant_supplied_id)
        except IntegrationError as e:
            return integration_error_response(e)
        return Response(data)

    def patch(self, request, merchant_supplied_id):
        try:
            data = self._client_for(merchant_supplied_id).update_store_details(
                merchant_supplied_id, request.data
            )
        except IntegrationError as e:
            return integration_error_response(e)
        return Response(data)

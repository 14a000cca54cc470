"""
Webhook views for delivery marketplaces.

Every event type has its own endpoint; all of them hand the JSON body to the
WebhookEventRouter and acknowledge with ``{"ok": true}``. Only an order event
whose upsert failed answers 500, so the marketplace retries it.
"""

import logging

from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ..services.webhooks import WebhookEventRouter

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class DoorDashWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    event_type = None
    router_class = WebhookEventRouter

    def post(self, request, *args, **kwargs):
        try:
            payload = request.data if isinstance(request.data, dict) else {}
        except ParseError:
            logger.warning(f"Dropping {self.event_type} webhook with a malformed body")
            payload = {}

        try:
            result = self.router_class().handle(self.event_type, payload)
        except Exception:
            logger.error(f"{self.event_type} webhook failed", exc_info=True)
            return Response(
                {"ok": False, "error": "Unable to process event."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(result)

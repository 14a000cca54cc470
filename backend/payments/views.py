from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from .models import Payment
from .serializers import PaymentSerializer
from .services import PaymentService


class PaymentViewSet(ReadOnlyBaseViewSet):
    queryset = Payment.objects.all()
    serializer_class = PaymentSerializer
    filterset_fields = ["order", "status", "method"]

    @action(detail=True, methods=["post"], url_path="void")
    def void(self, request: Request, pk=None) -> Response:
        """Voids the payment; the order's paid and due totals follow."""
        payment = PaymentService.void_payment(self.get_object())
        return Response(self.get_serializer(payment).data)

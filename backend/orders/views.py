from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from payments.serializers import PaymentSerializer
from payments.services import PaymentService
from .models import Order, OrderDiscount, OrderItem
from .serializers import (
    AddItemSerializer,
    ApplyDiscountSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    RecordPaymentSerializer,
    UpdateChargesSerializer,
)
from .services import OrderCalculationService, OrderService


class OrderViewSet(BaseViewSet):
    """
    POS surface over the order ledger.

    Orders are read through the standard list/retrieve routes; every change
    goes through an action backed by OrderService or PaymentService, each of
    which ends in a ledger recompute. Totals are never written directly.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_fields = ["status", "order_type"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_serializer_class(self):
        if self.action == "create":
            return OrderCreateSerializer
        return OrderSerializer

    def _order_response(self, order, status_code=status.HTTP_200_OK):
        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderSerializer(order).data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = OrderService.create_order(**serializer.validated_data)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order, status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        return Response(
            {"error": "Use the charges, items or discounts actions to change an order."},
            status=status.HTTP_405_METHOD_NOT_ALLOWED,
        )

    def destroy(self, request, *args, **kwargs):
        return Response(
            {"error": "Orders are voided, not deleted."},
            status=status.HTTP_405_METHOD_NOT_ALLOWED,
        )

    @action(detail=True, methods=["post"], url_path="items")
    def add_item(self, request: Request, pk=None) -> Response:
        order = self.get_object()
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            OrderService.add_item(
                order,
                data["menu_item"],
                quantity=data["quantity"],
                price=data.get("price"),
                notes=data["notes"],
                modifiers=data["modifiers"],
            )
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order, status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"items/(?P<item_id>\d+)")
    def remove_item(self, request: Request, pk=None, item_id=None) -> Response:
        order = self.get_object()
        order_item = get_object_or_404(OrderItem, pk=item_id, order=order)
        try:
            OrderService.remove_item(order_item)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order)

    @action(detail=True, methods=["post"], url_path="discounts")
    def apply_discount(self, request: Request, pk=None) -> Response:
        order = self.get_object()
        serializer = ApplyDiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            OrderService.apply_discount(
                order,
                discount=serializer.validated_data.get("discount"),
                amount=serializer.validated_data.get("amount"),
            )
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order, status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"discounts/(?P<discount_id>\d+)")
    def remove_discount(self, request: Request, pk=None, discount_id=None) -> Response:
        order = self.get_object()
        applied = get_object_or_404(OrderDiscount, pk=discount_id, order=order)
        try:
            OrderService.remove_discount(applied)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order)

    @action(detail=True, methods=["patch"], url_path="charges")
    def charges(self, request: Request, pk=None) -> Response:
        """Updates service charge, delivery charge and tax exemption."""
        order = self.get_object()
        serializer = UpdateChargesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            OrderService.update_charges(order, **serializer.validated_data)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._order_response(order)

    @action(detail=True, methods=["post"], url_path="recalculate")
    def recalculate(self, request: Request, pk=None) -> Response:
        order = self.get_object()
        OrderCalculationService.recalculate_order_totals(order.pk)
        return self._order_response(order)

    @action(detail=True, methods=["post"], url_path="payments")
    def payments(self, request: Request, pk=None) -> Response:
        order = self.get_object()
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            payment = PaymentService.record_payment(order, **serializer.validated_data)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        data = self._order_response(order).data
        data["payment"] = PaymentSerializer(payment).data
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="void")
    def void(self, request: Request, pk=None) -> Response:
        order = OrderService.void_order(self.get_object())
        return self._order_response(order)

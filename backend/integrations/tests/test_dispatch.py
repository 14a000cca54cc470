"""
Kitchen Dispatch Trigger Tests

A released order reaches the kitchen exactly once, however many release
events arrive.
"""
import pytest

from integrations.repositories import DjangoKitchenGateway, KitchenGateway
from integrations.services.dispatch import KitchenDispatchTrigger
from kds.models import KitchenTicket
from orders.models import Order
from orders.services import OrderService


class FakeKitchenGateway(KitchenGateway):
    def __init__(self, orders=("order-1",)):
        self.orders = set(orders)
        self.tickets = set()
        self.dispatched = []
        self.events = []

    def lock_order(self, order_id):
        self.events.append(("lock", order_id))
        return order_id in self.orders

    def has_ticket(self, order_id):
        self.events.append(("check", order_id))
        return order_id in self.tickets

    def dispatch(self, order_id):
        self.dispatched.append(order_id)
        self.tickets.add(order_id)


class TestKitchenDispatchTrigger:
    def test_first_fire_dispatches(self):
        gateway = FakeKitchenGateway()

        assert KitchenDispatchTrigger(gateway).fire("order-1") is True
        assert gateway.dispatched == ["order-1"]

    def test_second_fire_is_a_no_op(self):
        gateway = FakeKitchenGateway()
        trigger = KitchenDispatchTrigger(gateway)

        trigger.fire("order-1")
        assert trigger.fire("order-1") is False
        assert gateway.dispatched == ["order-1"]

    def test_lock_is_taken_before_the_ticket_check(self):
        gateway = FakeKitchenGateway()

        KitchenDispatchTrigger(gateway).fire("order-1")

        assert gateway.events[:2] == [("lock", "order-1"), ("check", "order-1")]

    def test_missing_order_is_skipped(self):
        gateway = FakeKitchenGateway(orders=())

        assert KitchenDispatchTrigger(gateway).fire("order-1") is False
        assert gateway.dispatched == []


@pytest.mark.django_db
class TestDjangoKitchenDispatch:
    def test_ticket_created_once_and_order_sent(self, order, burger):
        OrderService.add_item(order, burger, notes="no onions")
        trigger = KitchenDispatchTrigger(DjangoKitchenGateway())

        assert trigger.fire(order.pk) is True
        assert trigger.fire(order.pk) is False

        assert KitchenTicket.objects.filter(order=order).count() == 1
        ticket = KitchenTicket.objects.get(order=order)
        assert ticket.items.get().notes == "no onions"
        order.refresh_from_db()
        assert order.status == Order.OrderStatus.SENT

    def test_paid_order_keeps_status(self, order, burger):
        OrderService.add_item(order, burger)
        Order.objects.filter(pk=order.pk).update(status=Order.OrderStatus.PAID)

        KitchenDispatchTrigger().fire(order.pk)

        order.refresh_from_db()
        assert order.status == Order.OrderStatus.PAID

    def test_unknown_order(self, db):
        import uuid

        assert KitchenDispatchTrigger().fire(uuid.uuid4()) is False

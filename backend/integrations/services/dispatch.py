import logging
from typing import Optional

from ..repositories import DjangoKitchenGateway, KitchenGateway

logger = logging.getLogger(__name__)


class KitchenDispatchTrigger:
    """
    Sends a released external order to the kitchen at most once.

    The order row is locked before the existing-ticket check so that two
    concurrent release events serialize; the second one sees the first
    one's ticket and skips.
    """

    def __init__(self, gateway: Optional[KitchenGateway] = None):
        self.gateway = gateway or DjangoKitchenGateway()

    def fire(self, order_id) -> bool:
        """
        Returns:
            True if a kitchen ticket was created by this call.
        """
        with self.gateway.atomic():
            if not self.gateway.lock_order(order_id):
                logger.warning(f"Kitchen dispatch skipped, order {order_id} not found")
                return False
            if self.gateway.has_ticket(order_id):
                logger.info(f"Order {order_id} already has a kitchen ticket, skipping dispatch")
                return False
            self.gateway.dispatch(order_id)

        logger.info(f"Dispatched order {order_id} to the kitchen")
        return True

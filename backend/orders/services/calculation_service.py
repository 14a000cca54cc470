import logging
import time
from typing import Optional

from orders.calculators import LedgerResult, OrderCalculator
from orders.repositories import DjangoOrderLedgerRepository, OrderLedgerRepository

logger = logging.getLogger(__name__)


class OrderCalculationService:
    """Recomputes an order's totals and status from its current parts."""

    @staticmethod
    def recalculate_order_totals(
        order_id, repository: Optional[OrderLedgerRepository] = None
    ) -> Optional[LedgerResult]:
        """
        Recompute and persist every derived financial field of an order.

        This must be the last step of any mutation to items, modifiers,
        discounts, payments or charges. Stored totals are never read back as
        inputs.

        Args:
            order_id: Primary key of the order.
            repository: Ledger persistence; defaults to the Django repository,
                which locks the order row for the duration of the recompute.

        Returns:
            LedgerResult with the new totals, or None if the order does not exist.
        """
        repository = repository or DjangoOrderLedgerRepository()
        started = time.monotonic()

        with repository.atomic():
            ledger_input = repository.load(order_id)
            if ledger_input is None:
                logger.warning(f"Recalculation skipped, order {order_id} not found")
                return None

            result = OrderCalculator(ledger_input).calculate_totals()
            repository.save(result)

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(
            f"Recalculated order {order_id}: {len(ledger_input.lines)} items, "
            f"total={result.total} due={result.due} status={result.status} "
            f"({elapsed_ms:.1f}ms)"
        )
        return result

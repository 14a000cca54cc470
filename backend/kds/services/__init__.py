from .dispatch_service import KitchenDispatchService

__all__ = ['KitchenDispatchService']

"""
Custom exceptions for delivery marketplace integrations.
"""


class IntegrationError(Exception):
    """Base exception for integration-related errors."""
    pass


class IntegrationConfigurationError(IntegrationError):
    """Raised when a provider is disabled or its credentials are incomplete."""

    def __init__(self, provider_code=None, message=None):
        self.provider_code = provider_code
        if message is None:
            message = f"Integration '{provider_code}' is not configured"
        super().__init__(message)


class StoreNotMappedError(IntegrationError):
    """Raised when an outbound operation targets a store with no mapping row."""

    def __init__(self, merchant_supplied_id, message=None):
        self.merchant_supplied_id = merchant_supplied_id
        if message is None:
            message = f"Store '{merchant_supplied_id}' is not mapped"
        super().__init__(message)


class MarketplaceAPIError(IntegrationError):
    """Raised when the marketplace answers with a non-2xx status."""

    def __init__(self, status_code, body=None, message=None):
        self.status_code = status_code
        self.body = body if body is not None else {}
        if message is None:
            message = f"Marketplace API responded with HTTP {status_code}"
        super().__init__(message)

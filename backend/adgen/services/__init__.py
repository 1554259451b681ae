"""Services package - business logic and infrastructure adapters."""

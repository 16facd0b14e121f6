"""
Shared utilities for the Passport token service.

This package aggregates common building blocks consumed by the service
packages:

- config: Service and signer configuration via pydantic-settings
- logging: Structured logging with structlog
- errors: Canonical error types and responses
- circuit_breaker: Resilient external call protection

Any cross-service logic should live here to avoid import cycles across
service packages. Do not import from service_* packages into shared/.
"""

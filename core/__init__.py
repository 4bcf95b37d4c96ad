"""
Shared building blocks for the activation service.

Phone number and device identifier value objects, the domain error
taxonomy, the in-process event bus, request middleware and the
health/metrics endpoints live here.
"""

"""
HTTP API for the activation service.
"""

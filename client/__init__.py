"""
Client module - Activation session for the Niyyah app.

This module handles:
- Device fingerprinting
- The local advisory activation cache
- Startup reconciliation of the cache against the activation service
- User-driven activation, verification and logout
"""

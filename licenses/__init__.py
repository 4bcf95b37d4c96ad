"""
Licenses module - License record management.

This module handles:
- LicenseRecord entity and its binding invariants
- Idempotent intake of unclaimed licenses
- The atomic claim of a license by a device
"""

"""
Activations module - device binding and activation status.

This module handles:
- Activating a license on a device
- Status checks by phone number
- Session restoration by device fingerprint
"""

"""
Activations module - device activation of licenses.

This module handles:
- Binding a license to a device on first activation
- Validating a license for a device
- Append-only activation log
"""

"""
Registrations module - installed software reports.

This module handles:
- Registration headers keyed by the customer's tax ID
- Device rows reported under each header
- Assigning a header to a license and counting bound devices
"""

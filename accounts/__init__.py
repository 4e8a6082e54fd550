"""
Accounts module - back-office operators.

This module handles:
- Operators with a role and an optional company
- Hashed API keys used to authenticate operators
- Access log rows written for every authenticated request
"""

"""
Companies module - distribution hierarchy and clients.

This module handles:
- Company entity and its reseller / sub-company / agent / end-client tree
- Parent type rules and hierarchy traversal
- Operator visibility scopes
- Client entity and validation status
"""

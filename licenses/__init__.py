"""
Licenses module - license issue and lifecycle.

This module handles:
- License entity and status derivation
- Expiry computation per license type
- Issue, renew, suspend and resume
- Expiring-license queries and the periodic status sweep
"""

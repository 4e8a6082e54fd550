"""
Wallets module - company credit wallets.

This module handles:
- CompanyWallet entity with cached balance and running totals
- Append-only wallet ledger (recharge, spend, transfer)
- Atomic balance + ledger persistence
"""

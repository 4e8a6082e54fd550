"""
Billing module - license payment transactions.

This module handles:
- Transactions for license activations and renewals
- Payment status changes and payment with wallet credits
- Dashboard statistics
"""

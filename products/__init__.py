"""
Products module - licensable software catalog.

Each product carries the template licenses start from: price,
discount, license type, user and device limits and trial length.
"""

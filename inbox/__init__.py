"""Visibility-aware notification inbox.

Exposes listing, ordering and unread counters over the notifications each
user is allowed to see.
"""

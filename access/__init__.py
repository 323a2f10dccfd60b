"""
Access module - Requester entitlement gating.

This module handles:
- User entity and entitlement resolution
- Access control gate (authorize, enable, disable)
- User repository (port) and Django ORM adapter
"""

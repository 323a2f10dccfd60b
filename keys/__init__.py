"""
Keys module - License key issuance and lifecycle.

This module handles:
- Key entity and token generation
- Key lifecycle (issue, bulk issue, check, delete, purge expired, mark used)
- Key statistics per application
"""

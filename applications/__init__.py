"""
Applications module - App registry.

This module handles:
- Application entity (the namespace keys belong to)
- Application repository (port)
- Application infrastructure (Django ORM adapters)
"""

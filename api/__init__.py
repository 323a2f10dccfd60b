"""
API module - HTTP entry points.

This module handles:
- The command endpoint and its dispatcher
- Request/response serializers
- Exception to envelope mapping
"""

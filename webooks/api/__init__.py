"""
HTTP API. The application lives in ``webooks.api.app``.
"""

"""
Partner API - Middleware Package
=================================

Middleware Chain:
    Request → [Request ID] → [Request Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so that every log line of the request, including the
    access log line written on the way out, carries the same ID.
"""

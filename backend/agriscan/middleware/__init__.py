# Middleware package init
"""
AgriScan Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request id is assigned before the logging middleware reads it, and
    is written to the response headers on the way back out.
"""

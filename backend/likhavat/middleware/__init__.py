"""
Kacchi Likhavat Backend — Middleware Package
=============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit: reject abusive clients before any other work
    2. Request ID: correlation id for logs and error bodies
    3. Logging:    one access line per request, with duration
    4. GZip/CORS:  Starlette built-ins

    Responses travel back through the same chain in reverse.
"""

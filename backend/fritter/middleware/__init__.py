# Middleware package init
"""
Fritter Backend: Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS]
            → [Session] → Route Handler

    1. Request ID sets the correlation id used by logs and error bodies
    2. Logging records method, path, status and duration, 429s included
    3. Rate Limit rejects abusive clients before the app does any work
    4. Session (Starlette) decodes the signed cookie into request.session
"""

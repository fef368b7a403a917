# Middleware package init
"""
DayNotes Backend: Middleware Package
======================================

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [Session] → [CORS] → Route

    - Rate Limit: only touches POST /api/auth/login and /register
    - Request ID: correlation id in a ContextVar and the X-Request-ID header
    - Logging: one access line per request, level by status class
    - Session: Starlette SessionMiddleware, signed cookie → request.session
"""

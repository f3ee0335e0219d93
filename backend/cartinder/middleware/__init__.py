# Middleware package init
"""
Car Tinder Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request Context] → [GZip] → [CORS] → Route Handler

    Request Context runs outermost so its ID is set before anything logs
    and its access line measures everything below it, handlers included.
    GZip and CORS come from FastAPI/Starlette.
"""

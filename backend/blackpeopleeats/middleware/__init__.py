# Middleware package init
"""
BlackPeopleEats Backend — Middleware Package
==============================================

Middleware Chain (order matters!):
    Request → [Request context] → [GZip] → [CORS] → Route Handler

    The request context middleware is outermost: it assigns the request id
    before anything else can log, and its access line measures the time
    spent in everything below it.
"""

# Middleware package init
"""
NoteSync: Middleware Package
============================

Middleware Chain:
    Request → [Request ID] → [CORS] → [Logging] → [GZip] → Route Handler

    Starlette runs middleware in reverse order of registration, so main.py
    adds GZip first and RequestIDMiddleware last. Logging converts uncaught
    faults to the generic 500, so that response still passes back through
    CORS and gets its X-Request-ID.
"""

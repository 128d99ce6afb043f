# Routes package init
"""
NoteSync: API Routes Package
============================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/PATCH/DELETE /notes/{id}
    - health.py:  GET /health
    - spa.py:     GET /{anything} → client entry document (registered last)

Routes stay thin: they extract request data, call NoteStore, and let the
global exception handlers in main.py shape error responses.
"""

# Services package init
"""
NoteSync: Services Layer
========================

What:  Business logic sitting between routes (HTTP) and the in-memory state.

Service Inventory:
    - NoteStore: owned note collection with exclusive mutation methods
"""

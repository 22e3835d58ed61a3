# Services package init
"""
NoteCache Backend — Services Layer
====================================

What:  Business logic and storage, sitting between routes (HTTP) and the disk.

Service Inventory:
    - NoteBackend (abstract): raw text I/O contract (storage_base.py)
    - FileSystemBackend: one <name>.txt per note in the cache dir (file_storage.py)
    - InMemoryBackend: dict-backed backend for tests (memory_storage.py)
    - NoteStore: existence-gated CRUD over a backend (note_service.py)
"""

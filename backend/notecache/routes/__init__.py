# Routes package init
"""
NoteCache Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one slice of the surface.

Route Inventory:
    - notes.py:   GET    /notes           (list all notes as JSON)
                  GET    /notes/{name}    (note text)
                  PUT    /notes/{name}    (replace note text)
                  DELETE /notes/{name}    (remove note)
    - write.py:   POST   /write           (create note from form fields)
    - form.py:    GET    /UploadForm.html (static upload form)
    - health.py:  GET    /health          (service health check)

Design Principle:
    Routes are THIN: pull data out of the request, call NoteStore, wrap the
    result. Status codes for failures come from the global exception
    handlers in main.py, not from the routes.
"""

# Routes package init
"""
AP Exam Sync: API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - data.py:     GET    /api/data
    - courses.py:  POST   /api/courses
                   PUT    /api/courses/{id}
                   GET    /api/courses/{id}
    - notes.py:    POST   /api/notes
                   PUT    /api/notes/{id}
                   DELETE /api/notes/{id}
                   POST   /api/notes/{id}/rate
    - auth.py:     POST   /api/auth/signup
                   POST   /api/auth/login
    - health.py:   GET    /health

Routes stay thin: they pull data from the request, call a service with the
DocumentStore from `get_store`, and return the result. Business rules live
in services.
"""

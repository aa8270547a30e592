# Services package init
"""
AP Exam Sync: Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and the document store.
How:   Services receive the DocumentStore handle on every call, apply the
       field checks and lookups, and mutate the document inside a store
       transaction.

Service Inventory:
    - CourseService: create / get / merge-update courses
    - NoteService:   create / edit / delete / rate community notes
    - AuthService:   demo signup and login
    - DataService:   full-state export for GET /api/data
"""

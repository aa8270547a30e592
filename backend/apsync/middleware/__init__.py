# Middleware package init
"""
AP Exam Sync: Middleware Package
=================================

Execution order (outermost first):
    RequestID → RequestLogging → CORS → route handler
"""

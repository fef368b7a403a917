# Routes package init
"""
DayNotes Backend: Routes Package
==================================

Route Inventory:
    - notes.py:   GET/POST /api/notes, PUT/DELETE /api/notes/{id},
                  GET /api/notes/summary
    - auth.py:    /api/auth/register, /login, /logout, /session
    - pages.py:   GET /, /dashboard (session guard), /login
    - health.py:  GET /health

Routes stay thin: extract request data, resolve the session, call a
service, shape the response.
"""

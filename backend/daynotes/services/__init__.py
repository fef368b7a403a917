# Services package init
"""
DayNotes Backend: Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession and the caller's user id,
       apply the rules, and return schemas or ORM objects.

Service Inventory:
    - AuthService: registration and credential checks (passlib)
    - NoteService: day-scoped note CRUD and per-day summaries
"""

"""
Kacchi Likhavat Backend — API Routes Package
=============================================

Route Inventory:
    - health.py:     GET  /, /health                      (public)
    - auth.py:       POST /api/auth/register, /login      (public)
    - rooms.py:      /api/rooms[/{id}]
    - notes.py:      /api/notes[/{id}]
    - stories.py:    /api/stories/chapters[/{id}], /api/stories[/{id}]
    - expenses.py:   /api/expenses[/summary | /{id}]
    - memories.py:   /api/memories[/{id}]
    - users.py:      /api/users/{id}
    - dashboard.py:  GET /api/dashboard
    - search.py:     GET /api/search

Routes are thin: they read the request, call one service and wrap the
result in the response envelope. Business rules live in services/.
"""

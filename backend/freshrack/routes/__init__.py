# Routes package init
"""
Freshrack Backend — API Routes Package
========================================

Route Inventory:
    - health.py:  GET  /                          (liveness text)
                  GET  /health                    (database check)
    - foods.py:   POST /api/foods                 (create)
                  GET  /api/foods                 (list, ?search=&category=)
                  GET  /api/foods/nearly-expired
                  GET  /api/foods/expired
                  GET  /api/foods/stats
                  GET  /api/foods/user/{email}
                  GET / PUT / DELETE /api/foods/{id}
    - notes.py:   GET / POST /api/foods/{id}/notes

Routes stay thin: extract inputs, call a service, return its result.
"""

# Routes package init
"""
Car Tinder Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - cars.py:      GET    /cars                 (all cars with rating and likes)
                    POST   /api/like             (like a car)
                    DELETE /api/resetLikes       (remove a user's likes)
                    GET    /liked/{userId}       (cars a user liked)
    - bookings.py:  POST   /testdrive            (book a test drive)
    - dealers.py:   GET    /dealer/logs          (dealer activity log)
    - pages.py:     GET    /                     (landing page)
    - health.py:    GET    /health               (service health check)

Design Principle:
    Routes are THIN: read the request, call CarService, return the result.
    Error responses come from the global exception handlers in main.py.
"""

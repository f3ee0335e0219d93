# Services package init
"""
Car Tinder Backend — Services Layer
=====================================

What:  Everything between the routes (HTTP) and the MySQL store.

Service Inventory:
    - CarStore:   Data-access collaborator; one SQL statement or procedure call
                  per operation, driver errors decoded into tagged exceptions
    - CarService: Required-field validation and per-route error envelopes

Why two layers:
    CarStore can be unit-tested against a mocked AsyncSession, and routes can
    be tested against an in-memory store via FastAPI dependency overrides.
"""

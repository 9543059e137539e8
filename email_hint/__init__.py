"""
Email Hint: employee phone lookup by email prefix.

Application package root. Hexagonal architecture (ports & adapters):

Bounded contexts:
    - directory: Employee phone lookup by email-address prefix.

Layers:
    - domain: Entities, ports (ABCs), errors. No framework imports.
    - application: Use cases and DTOs.
    - infrastructure: Storage adapters (psycopg2, SQLAlchemy) implementing ports.
    - interfaces: FastAPI routers, Pydantic schemas, request dependencies.
    - shared: Cross-cutting concerns (errors, logging, middleware).
"""

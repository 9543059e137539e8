"""
Infrastructure adapters for the directory bounded context.

Each adapter implements a domain port (ABC) on top of PostgreSQL,
either through psycopg2 directly or through the SQLAlchemy ORM.
"""

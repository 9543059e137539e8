"""
Interfaces layer package.

Contains FastAPI routers, Pydantic response schemas and request
dependencies. No business logic belongs here.
Routes call use cases and return responses.
"""

"""
Domain layer package.

Contains entities, port interfaces and domain errors.
No framework imports, no IO, no side effects.
"""

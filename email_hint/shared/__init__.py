"""
Shared module package.

Contains cross-cutting concerns:
- Error handling and mapping
- Access logging middleware
- Logging configuration
"""

"""
Directory bounded context, domain layer.

Employee phone lookup by email-address prefix.
"""

"""Resolver package for the GraphQL schema.

Types, queries and mutations import their resolver functions lazily from the
sibling modules to avoid circular imports between type definitions.
"""

"""Repository interfaces and implementations.

This package defines abstract repository interfaces for the domain entities,
the specification evaluator they share, and concrete implementations such as
the SQLite adapters under :mod:`storefront.repositories.sqlite`.
"""

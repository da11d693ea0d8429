"""Catalog admin backend.

Product, category and banner image management over a REST API, with a
thin async client and a paginated product feed for admin front ends.
"""

__version__ = "0.1.0"

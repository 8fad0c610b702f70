"""
High-level use cases for the flatrest service.

Routers call CollectionService instead of reading or writing the collection
files directly.
"""

"""
Products feature: CRUD over the products table.
"""

"""
News feature: CRUD endpoints, request validation and the two interchangeable
stores (Postgres and in-memory).
"""

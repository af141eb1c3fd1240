"""
Core infrastructure for the Social Saver backend.

- database: MongoDB async client with Motor driver and connection pooling
- container: process-wide service singletons and FastAPI dependencies
"""

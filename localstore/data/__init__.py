"""
Data Layer - Persistence for the file store.
"""

"""
Songbook - Favourite songs collection.

A FastAPI service that keeps a personal collection of song records in a
single JSON file and exposes CRUD, filtering/sorting and statistics over it.
"""

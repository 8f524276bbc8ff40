"""
Book Catalog API Application Package

Serves book metadata loaded from a static JSON dataset and lets
authenticated users keep one review per book.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- exceptions.py: Error taxonomy raised by the core
- models/: In-memory domain records (Book, User, AccessToken)
- store.py: CatalogStore, the owner of all book records
- loader.py: Reads the dataset file into a CatalogStore
- services/: Identity, query and review services
- schemas/: Pydantic request/response schemas
- dependencies.py: Dependency injection functions
- routers/: API route handlers
- main.py: FastAPI application factory and configuration
"""

__version__ = "0.1.0"

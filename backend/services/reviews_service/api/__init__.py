"""
Reviews Service API Package

Package Structure:
    - api.py: Router aggregation and the published endpoint listing
    - dependencies.py: Shared FastAPI dependencies
    - endpoints/: API endpoint handlers
    - models/: Pydantic response models
"""

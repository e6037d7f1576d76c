"""
Reviews Service API Endpoints Package

Endpoints:
    - accounts.py: Account, location and review statistics endpoints
"""

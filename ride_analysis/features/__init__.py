"""
Feature modules for ride analysis.

Each feature is a self-contained module with:
- schemas.py - Pydantic result schemas
- service / model / computer - Business logic
- providers/ - External API adapters (weather only)
"""

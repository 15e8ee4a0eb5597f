"""
Validation Schemas Package

Contains Pydantic models for input validation and data sanitization.
"""

from .squad import (
    PlayerSchema,
    SquadSchema,
    AddPlayerRequestSchema,
    MovePlayerRequestSchema,
    ImportRequestSchema,
    PlayerSearchRequestSchema,
    format_validation_errors
)

__all__ = [
    'PlayerSchema',
    'SquadSchema',
    'AddPlayerRequestSchema',
    'MovePlayerRequestSchema',
    'ImportRequestSchema',
    'PlayerSearchRequestSchema',
    'format_validation_errors'
]

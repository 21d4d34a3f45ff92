"""
Utility functions
"""
from .id_generator import generate_id, validate_id, get_id_type

__all__ = ['generate_id', 'validate_id', 'get_id_type']

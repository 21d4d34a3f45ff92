"""
Services: submission admission and form read model
"""
from .errors import AllocationError, ValidationError, CapacityExceeded, ResourceUnavailable
from .ledger import CapacityLedger
from .allocator import Allocator
from .aggregator import Aggregator

__all__ = [
    'AllocationError',
    'ValidationError',
    'CapacityExceeded',
    'ResourceUnavailable',
    'CapacityLedger',
    'Allocator',
    'Aggregator',
]

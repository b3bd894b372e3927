"""
data_engine — Record storage layer.

Public API
----------
    from data_engine import RecordRepository, RecordStoreError
"""

from data_engine.repository import RecordRepository, RecordStoreError

__all__ = ["RecordRepository", "RecordStoreError"]

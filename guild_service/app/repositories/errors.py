class StoreError(Exception):
    """Unclassified failure of the persistence layer"""


class UniqueViolationError(StoreError):
    """A write was rejected by a uniqueness constraint"""

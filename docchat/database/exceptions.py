class PersistenceError(Exception):
    """Raised when the message store cannot complete a read or write."""

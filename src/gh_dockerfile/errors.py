class ConfigError(Exception):
    """Raised when a required credential or setting is missing."""
    pass

class FetchError(Exception):
    """Raised when repository metadata, README, listing or file content cannot be retrieved."""
    pass

class GenerationError(Exception):
    """Raised when the completion call fails or returns no usable text."""
    pass

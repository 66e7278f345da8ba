"""Define custom errors and exceptions."""


class DataQualityError(ValueError):
    """Exception for an OSM tag value that cannot be interpreted."""


class ValidationError(ValueError):
    """Exception for a graph that fails strict validation."""

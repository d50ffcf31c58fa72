"""Error codes for the ICS generator."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Input Errors
    PARSE_FAILED = "parse_failed"
    VALIDATION_FAILED = "validation_failed"
    
    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    
    # Service Errors
    SERVICE_ERROR = "service_error"

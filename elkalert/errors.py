"""Error types for elkalert.

Every fatal error carries the pipeline stage it came from and the exit
code the CLI uses for it.
"""

from typing import Optional, Sequence


class ElkAlertError(Exception):
    """Base class for all elkalert errors."""
    
    stage = "internal"
    exit_code = 1


class ConfigError(ElkAlertError):
    """Configuration file missing, unreadable or invalid."""
    
    stage = "config"
    exit_code = 2


class InvalidAddress(ElkAlertError):
    """One or more whitelist entries are not IP addresses."""
    
    stage = "whitelist"
    exit_code = 3
    
    def __init__(self, entries: Sequence[str]):
        self.entries = list(entries)
        listed = ", ".join(repr(e) for e in self.entries)
        super().__init__(f"Invalid IP address in whitelist: {listed}")


class BackendQueryError(ElkAlertError):
    """Search request could not be performed or was rejected."""
    
    stage = "query"
    exit_code = 4
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(ElkAlertError):
    """Search response does not have the expected aggregation shape."""
    
    stage = "decode"
    exit_code = 5
    
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed aggregation response at '{path}': {reason}")


class DeliveryError(ElkAlertError):
    """Webhook delivery failed. Never fatal."""
    
    stage = "delivery"
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

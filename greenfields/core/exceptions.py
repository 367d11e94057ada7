"""
Custom Exception Classes for the Greenfields site.

Configuration problems are fatal at startup; malformed contact submissions are
turned into an error signal patch by the contact handler.
"""


class ConfigError(Exception):
    """Exception raised when the layered configuration cannot be loaded."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedSubmissionError(Exception):
    """Exception raised when a contact form request body cannot be read."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed contact submission: {reason}")

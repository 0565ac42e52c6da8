"""Transaction line validation for the Twinfield transaction API."""

__version__ = "0.1.0"

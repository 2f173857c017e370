"""Request parsing, validation, bucket ranges, responses and campaign responses for a feature-flag decision API."""

__version__ = "0.1.0"

__all__ = [
    "apilogic",
    "bucket",
    "handle",
    "request_parser",
    "responses",
    "tracker",
    "udc",
    "validation",
]
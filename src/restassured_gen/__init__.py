"""Generate RestAssured API tests from HTTP request descriptions."""

__version__ = "0.1.0"

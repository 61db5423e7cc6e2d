"""Pay package and gross margin calculator for staffing contracts."""

__version__ = "1.0.0"

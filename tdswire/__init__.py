"""TDS wire date/time and XML values, column conversions and result streams."""

__version__ = "0.1.0"
__all__ = ["conversions", "query", "temporal", "to_sql", "xml"]
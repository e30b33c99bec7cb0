"""FastAPI query surface over the aggregation engine."""

"""elkalert - threshold alerting for Elasticsearch aggregations."""

__version__ = "1.0.0"

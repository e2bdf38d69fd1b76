"""Record set insights.

This package derives summary statistics and aggregation series
from normalized workout records for dashboards and the CLI.
"""

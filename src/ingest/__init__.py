"""Sheet data acquisition.

This package fetches workout logs over the gviz and CSV transports
and turns them into raw rows for normalization.
"""

"""Record cache and query layer.

This package persists normalized records between fetches and
applies dashboard filters to record sets.
"""

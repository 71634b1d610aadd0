"""
Metrics collection.
"""

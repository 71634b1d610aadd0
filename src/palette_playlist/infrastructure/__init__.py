"""
Infrastructure layer: configuration, external clients and monitoring.
"""

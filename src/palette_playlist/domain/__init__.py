"""
Domain layer: palette and mood value objects, mapping services.
"""

"""
Application layer: commands and orchestration services.
"""

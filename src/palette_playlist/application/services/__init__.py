"""
Application services for mood analysis and playlist generation.
"""

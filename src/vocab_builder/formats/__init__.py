"""
Format-specific components.
"""

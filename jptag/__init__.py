"""
JPTag cattle lookup crawler.
"""

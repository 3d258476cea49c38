"""
HTTP layer for the Image CDN.
"""

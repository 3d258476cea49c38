"""
Core modules for the Image CDN: constants, enums, image codec and storage.
"""

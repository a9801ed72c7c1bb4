"""
Cropping and grid composition.
"""

"""
Core settings shared by every layer.
"""

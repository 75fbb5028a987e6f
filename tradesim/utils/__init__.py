"""
Simulator Utilities
"""

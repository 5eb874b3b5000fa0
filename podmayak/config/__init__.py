"""
Static reference data
"""

"""
Parsing and mass aggregation
"""

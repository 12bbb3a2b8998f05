"""
Core transformation machinery: projections, datums, CRS and transforms.
"""

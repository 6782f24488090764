"""
reports - Report grids (grouping, formatting) and their Excel / PDF exports.
"""

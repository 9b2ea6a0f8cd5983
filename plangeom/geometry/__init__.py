"""Polygon geometry for floor plans using numpy, Shapely and pyclipper."""

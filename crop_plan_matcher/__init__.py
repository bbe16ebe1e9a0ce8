"""Crop Plan Coordinate Matcher.

Azure Functions workflow that reads a tab-separated file of field
coordinates and a GeoJSON crop plan from Blob Storage, finds the crop
plan polygon each coordinate falls in, and writes a CSV report of the
matches back to Blob Storage.
"""

__version__ = "0.1.0"

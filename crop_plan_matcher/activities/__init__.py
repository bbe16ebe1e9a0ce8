"""Pipeline activity functions.

Each activity performs a single unit of work within a match run:
- parse_coordinates: Turn the coordinates text file into Coordinate records
- load_catalog: Parse the GeoJSON crop plan into an ordered PolygonCatalog
- locate_points: Find the first polygon containing each coordinate
- build_report: Serialise matches into the CSV report
"""

"""Orchestrator functions.

Sequences a match run end to end:
1. Fetch and parse coordinates
2. Fetch and load the polygon catalog
3. Locate each coordinate and build the CSV report
4. Store the report and answer the caller
"""

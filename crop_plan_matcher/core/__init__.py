"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Default blob names, recognised attributes, report columns
- exceptions: Custom exception hierarchy
- blob_store: Blob fetch/store boundary over Azure Blob Storage
"""

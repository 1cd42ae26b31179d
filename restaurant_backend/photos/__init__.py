"""
Photo uploads.

Responsibilities:
- Give each upload a fresh unique name and an upload timestamp.
- Delegate validation and persistence to the storage adapter.
"""

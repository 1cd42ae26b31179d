"""
Sample-data loader.

Responsibilities:
- Read a CSV of sample restaurants.
- Upload any bundled photos through the photo service.
- Create each restaurant through the restaurant service.
"""

"""
Restaurant catalogue.

Responsibilities:
- Define the restaurant document and its request/response shapes.
- Build Elasticsearch queries for text, rating and distance search.
- Orchestrate create/update/search/delete with geolocation and photos.
"""

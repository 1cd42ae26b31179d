"""
Address geolocation.

Responsibilities:
- Define the address -> coordinate interface used by the restaurant service.
- Provide a placeholder locator that picks points around Kansas City.
"""

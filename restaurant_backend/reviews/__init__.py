"""
Reviews nested inside restaurant documents.

Responsibilities:
- Validate review submissions.
- Create, list, edit and delete reviews on their parent restaurant.
- Restrict edits to the review's author.
"""

"""
End-to-end browse flows against mocked HTTP.

Tests verify user-visible behavior:
- Walking server-driven feeds page by page
- Walking the daily feed by date
- Token resets in the middle of a walk
"""

"""
Selection layer: parses the ';'-separated region/chunk list and answers
"which area contains this point".

- builder: line parsing -> SelectionArea / SelectionSet
- search: SelectionSet and first-match lookup
"""
__all__ = ["builder", "search"]

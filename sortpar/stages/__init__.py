"""Sort stages: filters, sort keys, comparator, engine.

Each stage exposes a small, pure function API driven by a frozen
``SortConfig``; only the engine mutates anything (the line list it sorts).
"""

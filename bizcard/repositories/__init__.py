"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (SQL rows, blob
objects). Services depend on them rather than touching sessions or files.
"""

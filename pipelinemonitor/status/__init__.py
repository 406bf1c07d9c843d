"""Build status reporting.

Modules
-------
aggregator
    Pure functions that label timeline records, derive the overall build
    outcome, and collapse the timeline into ``StatusReport`` models.
renderer
    ``StatusRenderer`` prints reports to a Rich console.
"""

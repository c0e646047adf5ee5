"""
EaterWatch - Version history for a "best restaurants" map list.

Pulls archived captures of the list from the Wayback Machine, extracts
restaurant records from whichever page format each capture uses,
normalizes them, and stores the distinct versions as JSON.
"""

__version__ = "0.1.0"
__app_name__ = "eaterwatch"

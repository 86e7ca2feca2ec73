"""
IoT Robot Console - Core Package

Client-side data layer for the IoT robot administration dashboard: fetching
paginated records from the robot backend, normalizing them into view-models,
grouping alert logs and listening to realtime robot events.
"""

__version__ = "1.0.0"
__author__ = "IoT Robot Console Team"
__description__ = "Administration console for an IoT measurement robot"

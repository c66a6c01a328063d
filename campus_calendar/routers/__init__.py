"""
Routers module - API endpoint handlers organized by feature.

- calendar: Calendar views, navigation and local events
"""

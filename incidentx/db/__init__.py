"""
Database sinks for Incident Extract.
"""

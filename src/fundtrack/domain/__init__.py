"""Domain layer for fundtrack.

Services import the database interface, so this package only exposes
modules; import services from their own modules.
"""

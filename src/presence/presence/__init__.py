"""School presence package.

Tracks teacher absence and tardiness. The package is organized by feature
modules (school, absences, tardiness, statistics, reports, users) with plain
service/repository layers on top of a key-value record store.
"""

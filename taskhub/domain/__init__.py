"""Domain layer for TaskHub.

Entities, value objects, pure domain services and the error hierarchy.
Nothing in this package performs I/O.
"""

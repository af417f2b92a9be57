"""Core type definitions for Corral."""

type Projection[T] = T
"""Type alias indicating a value is a projection of a canonical record.

When you see `Projection[T]` in a return type, reads go through to the stored
record but writes stay on the returned object. To persist changes, call
`save()` (or `update()`) on it.
"""

# gridsearch/core/errors.py
#!/usr/bin/env python3


class GridError(ValueError):
    """Grid could not be built from the given input."""


class MalformedTemplateError(GridError):
    pass


class TopologyError(GridError):
    """Missing or duplicated start/goal cell."""


class EmptyFrontierError(IndexError):
    """remove() called on an empty frontier. Callers check is_empty() first."""

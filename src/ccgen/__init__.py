"""ccgen – expand option alternatives into one backend run per combination."""

__version__ = "1.0"

"""devlink — developer profiles, posts, likes and comments over a document store."""

__version__ = "1.0.0"

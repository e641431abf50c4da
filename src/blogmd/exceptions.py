"""Custom exceptions for blogmd."""


class BlogmdError(Exception):
    """Base exception for blogmd operations."""


class FetchError(BlogmdError):
    """Error during content fetching."""


class ContentNotFoundError(FetchError):
    """The requested markdown document does not exist."""


class ConfigError(BlogmdError):
    """Sidebar or page configuration could not be loaded."""

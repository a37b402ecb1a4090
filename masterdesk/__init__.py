"""masterdesk: searchable selection, caching and form submission for master-data records."""

__version__ = "0.1.0"

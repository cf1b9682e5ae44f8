from netview.services import table_fetcher
from netview.services.table_fetcher import TableFetcher


def get_fetcher() -> TableFetcher:
    """FastAPI dependency: the table fetcher for this request."""
    return table_fetcher.get_fetcher()

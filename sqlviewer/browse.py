"""
Paginated, search-filtered table listings.

The search term and the table name are pasted into the SQL text as-is.
That is an injection hole kept for compatibility with existing clients;
anything exposed beyond a single trusted operator needs parameter binding.
"""

from .types import BrowseQueries, BrowseRequest, TableSchema


class BrowseQueryBuilder:
    """Turns a BrowseRequest into a COUNT statement and a page statement."""

    def build(self, request: BrowseRequest, schema: TableSchema) -> BrowseQueries:
        where = self._where_clause(request, schema)
        source = f"FROM {request.table}"
        if where:
            source = f"{source} {where}"

        offset = request.page * request.page_size
        return BrowseQueries(
            count_sql=f"SELECT COUNT(*) as count {source}",
            select_sql=f"SELECT * {source} LIMIT {request.page_size} OFFSET {offset}",
        )

    @staticmethod
    def _where_clause(request: BrowseRequest, schema: TableSchema) -> str:
        # Unknown tables get no filter: the search is silently ignored.
        term = request.search_term.strip()
        columns = schema.get(request.table)
        if not term or not columns:
            return ""

        conditions = [f"{column.name} LIKE '%{term}%'" for column in columns]
        return "WHERE " + " OR ".join(conditions)

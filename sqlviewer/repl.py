"""
Interactive REPL for the viewer.
"""

import logging
import shlex

from .config import settings
from .engine import ViewerEngine
from .exceptions import SQLViewerError
from .types import BrowseRequest


class ViewerREPL:
    """Command-line REPL for querying and browsing the active database."""

    def __init__(self, engine: ViewerEngine):
        self.engine = engine
        self.running = False

    def run(self):
        """Run the REPL."""
        self.running = True
        print("SQL Viewer REPL")
        print(f"Active database: {self.engine.active_path}")
        print("Type 'exit' or 'quit' to exit")
        print("Type 'help' for help\n")

        while self.running:
            try:
                line = input("sql> ").strip()
                if not line:
                    continue

                if line.lower() in ('exit', 'quit'):
                    break
                elif line.lower() == 'help':
                    self._print_help()
                    continue
                elif line.startswith('.'):
                    self._run_command(line)
                    continue

                # Handle multi-line input
                query = line
                while not query.endswith(';'):
                    next_line = input("...> ").strip()
                    if next_line.lower() in ('exit', 'quit'):
                        self.running = False
                        break
                    query += " " + next_line

                if not self.running:
                    break

                result = self.engine.execute(query)
                if result.is_read:
                    self._print_rows(result.rows)
                    print(f"\n{len(result.rows)} row(s) returned in {result.duration_ms:.2f} ms")
                else:
                    print(f"{result.changes} row(s) changed, last insert id {result.last_insert_id}")

            except (SQLViewerError, ValueError) as e:
                print(f"Error: {e}")
            except KeyboardInterrupt:
                print("\nInterrupted")
                break
            except EOFError:
                print()
                break

    def _run_command(self, line: str):
        """Dispatch a dot-command."""
        command, *args = shlex.split(line)

        if command == '.tables':
            self._list_tables()
        elif command == '.schema' and args:
            self._print_schema(args[0])
        elif command == '.databases':
            self._list_databases()
        elif command == '.use' and args:
            database = self.engine.switch_database(args[0])
            print(f"Switched to {database.path}")
        elif command == '.browse' and args:
            page = int(args[1]) if len(args) > 1 else 0
            search = " ".join(args[2:])
            self._browse(args[0], page, search)
        else:
            print(f"Unknown command: {line} (type 'help')")

    def _print_help(self):
        """Print help information."""
        help_text = """
Available commands:
  exit, quit                      - Exit the REPL
  help                            - Show this help
  .tables                         - List all tables with their columns
  .schema TABLE                   - Show the columns of TABLE
  .databases                      - List known database files
  .use PATH                       - Make PATH the active database
  .browse TABLE [PAGE] [SEARCH]   - Show one page of TABLE, filtered by SEARCH

Anything else is run as SQL against the active database.
Statements may span several lines and end with ';'.

Examples:
  SELECT * FROM users;
  SELECT name, role FROM users WHERE role = 'admin';
  UPDATE orders SET status = 'completed' WHERE id = 2;
  .browse users 0 alice
        """
        print(help_text)

    def _list_tables(self):
        """List all tables."""
        schema = self.engine.get_schema()
        if not schema:
            print("No tables in database.")
            return

        print("Tables:")
        for table, columns in schema.items():
            print(f"  {table}")
            for column in columns:
                print(f"    {self._format_column(column)}")

    def _print_schema(self, table: str):
        columns = self.engine.describe(table)
        if not columns:
            print(f"No such table: {table}")
            return
        for column in columns:
            print(f"  {self._format_column(column)}")

    @staticmethod
    def _format_column(column) -> str:
        constraints = []
        if column.is_primary_key:
            constraints.append("PRIMARY KEY")
        if column.not_null:
            constraints.append("NOT NULL")
        if column.default_value is not None:
            constraints.append(f"DEFAULT {column.default_value}")
        constraint_str = f" ({', '.join(constraints)})" if constraints else ""
        return f"{column.name} {column.declared_type}{constraint_str}"

    def _list_databases(self):
        for database in self.engine.list_databases():
            marker = "*" if database.is_active else " "
            print(f"{marker} {database.path}")

    def _browse(self, table: str, page: int, search: str):
        result = self.engine.browse(BrowseRequest(table=table, page=page, page_size=20, search_term=search))
        self._print_rows(result.rows)
        print(f"\nPage {result.page + 1} of {result.total_pages} ({result.total_records} record(s))")

    def _print_rows(self, rows):
        """Display rows in a readable format."""
        if not rows:
            print("No rows returned")
            return

        columns = list(rows[0].keys())

        # Calculate column widths
        col_widths = {col: len(str(col)) for col in columns}
        for row in rows:
            for col in columns:
                col_widths[col] = max(col_widths[col], len(self._cell(row.get(col))))

        header = " | ".join(f"{col:<{col_widths[col]}}" for col in columns)
        print(header)
        print("-" * len(header))

        for row in rows:
            print(" | ".join(f"{self._cell(row.get(col)):<{col_widths[col]}}" for col in columns))

    @staticmethod
    def _cell(value) -> str:
        return "NULL" if value is None else str(value)


def main():
    """Main entry point for the REPL."""
    import argparse

    parser = argparse.ArgumentParser(description="SQL Viewer REPL")
    parser.add_argument("--db", default=settings.DEFAULT_DB_PATH, help="Default database file")
    parser.add_argument("--uploads-dir", default=settings.UPLOADS_DIR,
                        help="Directory for uploaded database files")
    parser.add_argument("--no-seed", action="store_true", help="Do not create the demo tables")

    args = parser.parse_args()
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = ViewerEngine(args.db, args.uploads_dir, seed_demo=not args.no_seed)
    try:
        ViewerREPL(engine).run()
    finally:
        engine.close()


if __name__ == "__main__":
    main()

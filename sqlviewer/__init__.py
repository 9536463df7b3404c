"""
SQL Viewer core: session, execution, schema, dump conversion and browsing.
"""

from .engine import ViewerEngine
from .repl import ViewerREPL

__all__ = ['ViewerEngine', 'ViewerREPL']

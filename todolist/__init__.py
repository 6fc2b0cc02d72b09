"""Inventory of TODO comment blocks across a tree of projects."""

from .comments import C_STYLE, HASH_STYLE, CommentDelimiters, CommentLine, find_comments, iter_comments
from .config import ScanConfig
from .discovery import find_files, find_projects
from .errors import DiscoveryError, FileAccessError, PatternSyntaxError, TodoListError
from .patterns import is_match_any
from .scan import FileReport, scan_file, scan_tree
from .todos import Todo, find_todos, make_position, parse_position

__version__ = "0.1.0"

"""
reflist - List installed applications and runtimes.

Core Modules:
- Model: Reference value type, kinds and scopes
- Store: Per-user and system-wide installation directory access
- Pipeline: Scope merging, row annotation, table rendering
- Foundation: Options, configuration files, logging, errors
"""

__version__ = "0.4.0"
__author__ = "reflist Contributors"

VERSION = __version__

# Model
from .refs import Kind, Reference, Scope
from .errors import InvalidReferenceError, ListingCancelled, ReflistError, StoreError

# Store
from .store import InstallationDir, InstallationStores, StoreAccessor

# Pipeline
from .merge import combine_kinds, merge_scope_sets, unique_names
from .annotate import Row, annotate, compact_rows, detail_row, format_latest, truncate_commit
from .table import TablePrinter
from .listing import list_installed

# Foundation
from .common import Cancellable
from .config import Config, ListOptions, load_config, load_config_file
from .logging_config import get_logger, setup_logging

__all__ = [
    "__version__",
    "VERSION",
    # Model
    "Kind",
    "Reference",
    "Scope",
    "ReflistError",
    "InvalidReferenceError",
    "StoreError",
    "ListingCancelled",
    # Store
    "StoreAccessor",
    "InstallationDir",
    "InstallationStores",
    # Pipeline
    "combine_kinds",
    "merge_scope_sets",
    "unique_names",
    "Row",
    "annotate",
    "compact_rows",
    "detail_row",
    "format_latest",
    "truncate_commit",
    "TablePrinter",
    "list_installed",
    # Foundation
    "Cancellable",
    "Config",
    "ListOptions",
    "load_config",
    "load_config_file",
    "setup_logging",
    "get_logger",
]

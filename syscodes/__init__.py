"""SysCode catalogue: loading, lookup and rendering of the reference tables."""

# Package exports should be side-effect free.

from .catalogue import SysCodeCatalogue
from .errors import CatalogueLoadError, MalformedRowError
from .models import SYSCODE_ID_OFFSET, SubsetEntry, SysCode, parse_syscode_id

__all__ = [
    "SysCodeCatalogue",
    "CatalogueLoadError",
    "MalformedRowError",
    "SYSCODE_ID_OFFSET",
    "SubsetEntry",
    "SysCode",
    "parse_syscode_id",
]

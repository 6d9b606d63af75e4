# dberror/core/logging/
# ├─ builder.py      # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py   # JsonFormatter, ColorFormatter
# ├─ filters.py      # SqlstateFilter, RedactFilter
# └─ handlers.py     # handler config factories (console/file)

from .builder import make_dict_config, setup_logging
from .filters import RedactFilter, SqlstateFilter

__all__ = ["setup_logging", "make_dict_config", "SqlstateFilter", "RedactFilter"]

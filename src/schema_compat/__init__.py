"""Schema Compat - structural schema compatibility and LCD computation."""

import logging
import warnings

__version__ = "0.1.0"
__author__ = "Schema Compat Team"
__license__ = "Apache-2.0"

# Keep third-party chatter out of compatibility reports
logging.getLogger("markdown_it").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

warnings.filterwarnings("ignore", category=DeprecationWarning, module="yaml")

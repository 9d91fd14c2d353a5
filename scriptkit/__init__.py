__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'scriptkit'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .declarations import *
from .colors import *
from .display import *
from .helptext import *
from .faults import *
from .parser import *
from .reporting import *
from .stack import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the parser and its declarations
__all__ += parser.__all__  # type: ignore[attr-defined]
__all__ += declarations.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the reporting, display, and helper modules
__all__ += reporting.__all__  # type: ignore[attr-defined]
__all__ += colors.__all__  # type: ignore[attr-defined]
__all__ += display.__all__  # type: ignore[attr-defined]
__all__ += helptext.__all__  # type: ignore[attr-defined]
__all__ += stack.__all__  # type: ignore[attr-defined]

__title__ = 'notion'
__license__ = 'MIT'
__version__ = "0.1.0"

from .command import *
from .faults import *
from .invocation import *
from .session import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
))

version_info = VersionInfo(0, 1, 0, "alpha", 0)

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the commands
__all__ += command.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the invocation
__all__ += invocation.__all__  # type: ignore[attr-defined]
# Load the exposed API of the session
__all__ += session.__all__  # type: ignore[attr-defined]

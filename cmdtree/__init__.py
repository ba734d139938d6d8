__title__ = 'cmdtree'
__author__ = 'cmdtree contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .dispatch import *
from .faults import *
from .formats import *
from .matching import *
from .options import *
from .renderers import *
from .tree import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every submodule
__all__ += dispatch.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += formats.__all__  # type: ignore[attr-defined]
__all__ += matching.__all__  # type: ignore[attr-defined]
__all__ += options.__all__  # type: ignore[attr-defined]
__all__ += renderers.__all__  # type: ignore[attr-defined]
__all__ += tree.__all__  # type: ignore[attr-defined]

from .constants import TERMEDIT_VERSION as __version__
from .editor import Editor, main

__all__ = ["Editor", "__version__", "main"]

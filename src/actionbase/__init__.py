"""ActionBase - action collections with draft and published versions.

Action collections group the actions of a JS object on a page. Editors work
on a draft while viewers are served the last published snapshot.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

"""planboard: undo/redo state engine and keyboard arbitration for a project board.

The package is split into:

- ``planboard.core``     : snapshot models, settings, the store and temporal log.
- ``planboard.history``  : change descriptions, the description cache, the panel model.
- ``planboard.keyboard`` : surface priority registry and shortcut routers.
- ``planboard.actions``  : board mutations that commit new snapshots.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"

"""blockmodel: regular 3D block models and their precedence neighborhoods.

Exposes the package version; the public API lives under ``blockmodel.core``.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"

"""polydict: a multilingual dictionary service.

The package is split into a small HTTP layer (``polydict.api``), the store
(``polydict.store``) and the load pipelines that reconcile per-language
source files into one entity graph (``polydict.pipelines``).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"

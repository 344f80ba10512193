"""sortpar package.

Avoid importing heavy submodules at package import time to prevent side-effects
(like logger configuration) during test collection.
"""

__version__ = "0.2.0"

__all__: list[str] = ["__version__"]

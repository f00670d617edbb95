"""
GraphCheck - keep documented class relationship graphs honest.

Classes describe their collaborators in a compact graph notation inside
their Javadoc; graphcheck extracts the real type dependencies from the Java
source and reports the ones the graph leaves out.

"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "GraphCheck Contributors"

__all__ = ["__version__"]

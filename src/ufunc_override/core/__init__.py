"""Core resolution engine.

``scanner`` finds override-capable arguments, ``normalizer`` builds the
canonical call, ``selector`` orders candidates and ``resolver`` runs the
invocation loop.  Submodules in core/ should not import from cli/.
"""
from __future__ import annotations

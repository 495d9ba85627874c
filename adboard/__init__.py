"""adboard — classified advertisements under a category forest.

Invariants:
    - Package root holds metadata only (no import side-effects)
"""

__version__ = "1.0.0"

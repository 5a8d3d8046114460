"""MediaWiki managed container init (Python-first, declarative).

Core design goals:
- Declarative: extensions, skins and Composer packages come from env
- Reconciled on every start (remove, update, install)
- Failures of one component never block the wiki from starting
- Generated configuration is pure output, never an input
- Centralized logging
"""

__version__ = "1.0.0"

__all__ = ["__version__"]

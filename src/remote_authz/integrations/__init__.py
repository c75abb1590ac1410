"""Framework integrations for remote-authz.

Each integration lives in its own sub-package and requires its framework
to be installed, e.g. ``pip install remote-authz[flask]``.
"""

__all__: list[str] = []

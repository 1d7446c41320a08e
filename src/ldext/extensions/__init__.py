"""Extension layer — the extend/retract protocol and shipped extensions.

Extensions may import from domain. They must never import from
services, commands, output, or config.
"""

from ldext.extensions.extended import Extended, retract_all
from ldext.extensions.fields import ExtensionFields
from ldext.extensions.forwarding import register_capability

__all__ = ["Extended", "ExtensionFields", "register_capability", "retract_all"]

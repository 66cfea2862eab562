__version__ = "0.1.0"

import logging

from swiftbridge.extension import SwiftExtension

log = logging.getLogger(__name__)

__all__ = ["SwiftExtension", "__version__"]

"""Daily diet planning against calorie, macro and NRV targets."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

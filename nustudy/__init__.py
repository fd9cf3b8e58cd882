"""
NUStudy – study-hour tracker (courses + logged sessions).
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

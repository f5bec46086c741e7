"""Utility constants for ralgebra.

Step constants are ``relativedelta`` offsets used as the default successor
resolution of temporal domains. Other domains bring their own successor.
"""

from dateutil.relativedelta import relativedelta

SECOND = relativedelta(seconds=1)
DAY = relativedelta(days=1)

DATETIME_RESOLUTION = SECOND
DATE_RESOLUTION = DAY

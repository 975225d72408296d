"""
UTC timestamp logging formatter for the Redfish inventory collector.

Management controllers and the inventory API rarely share a timezone with the
operator, so every log line is stamped in UTC.
"""

import datetime
import logging


class UTCTimestampFormatter(logging.Formatter):
    """
    Logging formatter that renders %(asctime)s in UTC with milliseconds.

    Format: YYYY-MM-DD HH:MM:SS.sss
    """

    def formatTime(self, record, datefmt=None):
        created = datetime.datetime.fromtimestamp(
            record.created, tz=datetime.timezone.utc
        )
        if datefmt:
            return created.strftime(datefmt)
        return created.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

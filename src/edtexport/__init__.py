"""edtexport — sanitized, cached timetable export server."""

from edtexport.core import ERROR_PREFIX, TimetableExport, get_timetable_xml

__all__ = ["ERROR_PREFIX", "TimetableExport", "get_timetable_xml"]

__version__ = "0.1.0"

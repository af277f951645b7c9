"""IGC flight log analysis: parsing, speeds and statistics, thermals, XC distances, waypoints, reports and a command line tool."""

__version__ = "1.0.0"
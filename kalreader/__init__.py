"""Export GPS training sessions to GPX, TCX, KML, Fitlog, CSV and map pages; replay or log device traffic."""

__version__ = "0.1.0"
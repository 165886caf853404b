"""SheetShift - AI-assisted spreadsheet column remapping."""

__version__ = "0.1.0"

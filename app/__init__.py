"""CRM read cache and join layer over a spreadsheet store."""

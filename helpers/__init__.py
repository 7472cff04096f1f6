"""Pure helpers - normalization, joins, dates, pagination."""

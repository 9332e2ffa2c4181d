"""
Constants and configuration values for the extraction engine.
"""

# Detected break types reported on the last symbol of an OCR word
BREAK_SPACE = 'SPACE'
BREAK_EOL_SURE_SPACE = 'EOL_SURE_SPACE'
BREAK_LINE_BREAK = 'LINE_BREAK'

# Date post-processing
DEFAULT_DATE_FORMAT = 'YYYY/MM/DD'
DATE_FORMAT_ALLOWED_CHARS = frozenset('MDY-/ ,')

# Date parts missing from the input default to this date (ISO format)
DATE_PARSE_DEFAULT = '2001-01-01'

# Greedy date format tokens, longest first within each letter
DATE_FORMAT_TOKEN_PATTERN = r'YYYYYY|YYYYY|YYYY|YY|Y|MMMM|MMM|MM|M|DDDD|DDD|DD|D'

# Template limits enforced at the template boundary
TEMPLATE_LIMITS = {
    'max_header_cells': 52,
    'max_data_rows': 100,
    'max_cell_sects': 4,
    'min_phrase_count': 1,
    'max_phrase_count': 100,
    'min_days_added': 0,
    'max_days_added': 100,
    'max_text_length': 100,
}

# Methods whose phraseOrValue is mandatory
PHRASE_REQUIRED_METHODS = ('topPhrase', 'leftPhrase', 'pattern', 'customValue')

# Name of each emitted CSV payload, formatted with the group index
CSV_FILE_NAME_PATTERN = '{index}.csv'

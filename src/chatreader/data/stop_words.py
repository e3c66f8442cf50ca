# chatreader/data/stop_words.py
"""
Default stop word lists for keyword extraction.
"""

COMMON_STOP_WORDS = [
    # common technical terms
    'value', 'button', 'return', 'const', 'let', 'var',
    'function', 'class', 'import', 'export', 'default',
    'true', 'false', 'null', 'undefined',

    # html/css terms
    'div', 'span', 'style', 'width', 'height',

    # common words
    'this', 'that', 'then', 'than',
    'when', 'what', 'which', 'while',
    'from', 'into', 'onto', 'under',

    # russian common words
    'это', 'как', 'так', 'где', 'когда',
    'что', 'чтобы', 'если', 'или', 'для',
]

TECHNICAL_STOP_WORDS = [
    # programming
    'string', 'number', 'boolean', 'object', 'array',
    'async', 'await', 'promise', 'callback',

    # web development
    'component', 'template', 'script', 'props', 'emit',
    'computed', 'methods', 'watch', 'mounted', 'created',
]

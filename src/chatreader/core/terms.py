# chatreader/core/terms.py
"""
Keyword extraction: tokenize, filter, stem and rank by frequency.

The tokenizer and stemmer are narrow capabilities so a different language
stemmer can be dropped in without touching the filtering and ranking steps.
"""

import re
from typing import Dict, Iterable, List, NamedTuple, Optional, Protocol

from nltk.stem.snowball import SnowballStemmer as NltkSnowballStemmer
from nltk.tokenize import RegexpTokenizer

from .detection import build_text_buffer
from .message import Message


MIN_TOKEN_LENGTH = 4
DEFAULT_MAX_TERMS = 10

CYRILLIC_PATTERN = re.compile(r'[Ѐ-ӿ]')


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> List[str]:
        ...


class Stemmer(Protocol):
    def stem(self, token: str) -> str:
        ...


class Term(NamedTuple):
    stem: str
    count: int


class WordTokenizer:
    """Splits text into runs of Latin/Cyrillic letters, digits and underscores."""

    WORD_PATTERN = r'[A-Za-zА-Яа-яЁё0-9_]+'

    def __init__(self, pattern: str = WORD_PATTERN):
        self._tokenizer = RegexpTokenizer(pattern)

    def tokenize(self, text: str) -> List[str]:
        return self._tokenizer.tokenize(text)


class SnowballStemmer:
    """Snowball stemmer for a single language."""

    def __init__(self, language: str = 'russian'):
        self.language = language
        self._stemmer = NltkSnowballStemmer(language)

    def stem(self, token: str) -> str:
        return self._stemmer.stem(token.lower())


class ScriptAwareStemmer:
    """Routes Cyrillic tokens to one stemmer and everything else to another."""

    def __init__(self, cyrillic: Optional[Stemmer] = None, latin: Optional[Stemmer] = None):
        self.cyrillic = cyrillic or SnowballStemmer('russian')
        self.latin = latin or SnowballStemmer('english')

    def stem(self, token: str) -> str:
        if CYRILLIC_PATTERN.search(token):
            return self.cyrillic.stem(token)
        return self.latin.stem(token)


class TagExtractor:
    """Ranks the most frequent keyword stems of a conversation."""

    def __init__(self,
                 stop_words: Iterable[str] = (),
                 max_terms: int = DEFAULT_MAX_TERMS,
                 tokenizer: Optional[Tokenizer] = None,
                 stemmer: Optional[Stemmer] = None):
        self.stop_words = {word.lower() for word in stop_words}
        self.max_terms = max_terms
        self.tokenizer = tokenizer or WordTokenizer()
        self.stemmer = stemmer or ScriptAwareStemmer()

    def is_stop_word(self, word: str) -> bool:
        return word.lower() in self.stop_words

    def add_stop_words(self, words: Iterable[str]) -> None:
        self.stop_words.update(word.lower() for word in words)

    def is_candidate(self, token: Optional[str]) -> bool:
        """Tokens shorter than four characters and stop words carry no topic."""
        return bool(token) and len(token) >= MIN_TOKEN_LENGTH and not self.is_stop_word(token)

    def count_stems(self, tokens: Iterable[str]) -> Dict[str, int]:
        # dict keeps first-seen order, which the ranking relies on for ties
        counts: Dict[str, int] = {}
        for token in tokens:
            if not self.is_candidate(token):
                continue
            stem = self.stemmer.stem(token)
            if stem:
                counts[stem] = counts.get(stem, 0) + 1
        return counts

    def extract(self, messages: Iterable[Message]) -> List[Term]:
        text = build_text_buffer(messages)
        counts = self.count_stems(self.tokenizer.tokenize(text))

        # sorted() is stable: equal counts stay in first-seen order
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [Term(stem, count) for stem, count in ranked[:max(self.max_terms, 0)]]

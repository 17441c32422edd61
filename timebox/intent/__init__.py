"""Natural-language intent resolution."""

from .resolver import Extraction, extract, infer_category, resolve_intent
from .tokenizer import CommandVerb, DateKeyword, DurationPhrase, Literal, TimeMention, tokenize

__all__ = [
    'CommandVerb',
    'DateKeyword',
    'DurationPhrase',
    'Extraction',
    'Literal',
    'TimeMention',
    'extract',
    'infer_category',
    'resolve_intent',
    'tokenize',
]

from .scorer import MatchMode, count_words, score
from .wordlists import load, load_word_lists

__all__ = ["MatchMode", "count_words", "load", "load_word_lists", "score"]

import logging
import string

from collections import Counter, namedtuple
from functools import partial
from multiprocessing.dummy import Pool as ThreadPool
from types import MappingProxyType

from util import xor_single_byte

logger = logging.getLogger(__name__)

# Letter frequencies were taken from raw letter averages at
# http://www.macfreek.nl/memory/Letter_Distribution, then rounded to 6
# decimal places for readability. The "other" class covers digits and
# punctuation and was set by observing ordinary prose. The table is
# normalized to sum to 1 below.
_RAW_CLASS_FREQUENCIES = {
    "space": 0.183169, "other": 0.025000,
    "a": 0.065531, "b": 0.012708, "c": 0.022651, "d": 0.033523, "e": 0.102179,
    "f": 0.019718, "g": 0.016359, "h": 0.048622, "i": 0.057343, "j": 0.001144,
    "k": 0.005692, "l": 0.033562, "m": 0.020173, "n": 0.057031, "o": 0.062006,
    "p": 0.015031, "q": 0.000881, "r": 0.049720, "s": 0.053263, "t": 0.075100,
    "u": 0.022952, "v": 0.007880, "w": 0.016896, "x": 0.001498, "y": 0.014700,
    "z": 0.000598,
}

ENGLISH_CLASS_FREQUENCIES = MappingProxyType({
    symbol_class: freq / sum(_RAW_CLASS_FREQUENCIES.values())
    for symbol_class, freq in _RAW_CLASS_FREQUENCIES.items()})

# Frequency of letter appearance in the Concise Oxford Dictionary (9th
# edition, 1995), in percent. Used only by the letter-weight method.
DICTIONARY_LETTER_WEIGHTS = MappingProxyType({ord(char): weight for char, weight in {
    "e": 11.1607, "a": 8.4966, "r": 7.5809, "i": 7.5448, "o": 7.1635, "t": 6.9509,
    "n": 6.6544, "s": 5.7351, "l": 5.4893, "c": 4.5388, "u": 3.6308, "d": 3.3844,
    "p": 3.1671, "m": 3.0129, "h": 3.0034, "g": 2.4705, "b": 2.0720, "f": 1.8121,
    "y": 1.7779, "w": 1.2899, "k": 1.1016, "v": 1.0074, "x": 0.2902, "z": 0.2722,
    "j": 0.1965, "q": 0.1962,
}.items()})

TEXT_BYTES = frozenset((string.digits + string.ascii_letters + string.punctuation +
                        " \t\n\r").encode())

ScoredDecryption = namedtuple("ScoredDecryption", ["key", "message", "score", "is_text"])
ScoringMethod = namedtuple("ScoringMethod", ["score_fn", "higher_is_better"])


def byte_class(byte):
    if byte < 0x80 and chr(byte) in string.ascii_letters:
        return chr(byte).lower()
    elif byte in b" \t\n\r":
        return "space"
    else:
        return "other"


# byte_class for every byte value, indexed by byte.
BYTE_CLASSES = tuple(byte_class(b) for b in range(256))


def is_text(text_bytes):
    return all(byte in TEXT_BYTES for byte in text_bytes)


def chi_squared(text_bytes):
    """Return the chi-squared distance between text_bytes and English.

    The sum runs over every class in ENGLISH_CLASS_FREQUENCIES, so common
    letters that never appear are penalized as well as letters that appear
    too often. Lower is more English-like. Empty input scores 0.
    """
    text_length = len(text_bytes)
    if not text_length:
        return 0.0
    class_counts = Counter(BYTE_CLASSES[byte] for byte in text_bytes)
    result = 0.0
    for symbol_class, freq in ENGLISH_CLASS_FREQUENCIES.items():
        expected = text_length * freq
        difference = class_counts[symbol_class] - expected
        result += difference * difference / expected
    return result


def letter_weight_score(text_bytes):
    return sum(DICTIONARY_LETTER_WEIGHTS.get(byte, 0.0) for byte in text_bytes.lower())


SCORING_METHODS = MappingProxyType({
    "chi-squared": ScoringMethod(chi_squared, higher_is_better=False),
    "letter-weight": ScoringMethod(letter_weight_score, higher_is_better=True),
})
DEFAULT_SCORING_METHOD = "chi-squared"


def get_scoring_method(method):
    try:
        return SCORING_METHODS[method]
    except KeyError:
        raise ValueError("unknown scoring method: {}".format(method)) from None


def score_text(text_bytes, method=DEFAULT_SCORING_METHOD):
    return get_scoring_method(method).score_fn(text_bytes)


def ranking_key(score_data, method=DEFAULT_SCORING_METHOD, per_byte=False):
    """Sort key for ScoredDecryption tuples, best first.

    Text decryptions always come before non-text ones. Within the same text
    status the method's better score wins. Pass per_byte=True to compare
    decryptions of different lengths.
    """
    score = score_data.score
    if per_byte and score_data.message:
        score /= len(score_data.message)
    if get_scoring_method(method).higher_is_better:
        score = -score
    return (not score_data.is_text, score)


def xor_score_data(ciphertext, key_byte, method=DEFAULT_SCORING_METHOD):
    message = xor_single_byte(ciphertext, key_byte)
    return ScoredDecryption(
        key=key_byte, message=message, score=score_text(message, method),
        is_text=is_text(message))


def all_byte_xor_score_data(ciphertext, method=DEFAULT_SCORING_METHOD):
    return [xor_score_data(ciphertext, key_byte, method) for key_byte in range(256)]


def best_byte_xor_score_data(ciphertext, method=DEFAULT_SCORING_METHOD):
    """Return the ScoredDecryption of the most English-like single-byte key.

    If no key produces text, the least-bad non-text decryption is returned.
    Ties go to the smallest key byte.
    """
    return min(all_byte_xor_score_data(ciphertext, method),
               key=partial(ranking_key, method=method))


def crack_xor_columns(columns, method=DEFAULT_SCORING_METHOD, workers=None):
    """Return the key whose byte i best decrypts columns[i] as English."""
    crack_column = partial(best_byte_xor_score_data, method=method)
    if workers:
        with ThreadPool(workers) as pool:
            results = pool.map(crack_column, columns)
    else:
        results = [crack_column(column) for column in columns]
    for i, score_data in enumerate(results):
        logger.debug("column %d: key byte 0x%02x, score %.3f%s", i, score_data.key,
                     score_data.score, "" if score_data.is_text else " (not text)")
    return bytes(score_data.key for score_data in results)


def crack_common_xor_key(ciphertexts, method=DEFAULT_SCORING_METHOD, workers=None):
    """Recover a key that was XOR'd into every ciphertext from offset 0."""
    if not ciphertexts:
        raise ValueError("ciphertexts must not be empty")
    columns = [bytes(c[i] for c in ciphertexts if i < len(c))
               for i in range(max(len(c) for c in ciphertexts))]
    return crack_xor_columns(columns, method=method, workers=workers)


def detect_single_byte_xor(ciphertexts, method=DEFAULT_SCORING_METHOD):
    """Find the ciphertext most likely to be English XOR'd with a single byte.

    Returns a tuple of the ciphertext's index and its best ScoredDecryption.
    """
    best_decodings = [(i, best_byte_xor_score_data(c, method))
                      for i, c in enumerate(ciphertexts)]
    if not best_decodings:
        raise ValueError("ciphertexts must not be empty")
    return min(best_decodings, key=lambda x: ranking_key(x[1], method, per_byte=True))

import logging

from collections import namedtuple
from functools import partial
from itertools import combinations
from multiprocessing.dummy import Pool as ThreadPool

from english import DEFAULT_SCORING_METHOD, crack_xor_columns, is_text, ranking_key, score_text
from util import apply_repeating_xor_key, bit_hamming_distance, chunks, shortest_period, transpose

logger = logging.getLogger(__name__)

DEFAULT_MIN_KEY_SIZE = 2
DEFAULT_MAX_KEY_SIZE = 40
DEFAULT_MIN_CHUNKS = 4
DEFAULT_MAX_CHUNKS = 64

CandidateKeySize = namedtuple("CandidateKeySize", ["key_size", "score"])
CrackResult = namedtuple("CrackResult", ["key", "plaintext", "key_size", "score", "is_text"])


class InvalidKeySizeRangeError(ValueError):
    pass


class KeySizeTooLargeError(ValueError):
    pass


class NoViableKeySizeError(ValueError):
    pass


def key_size_score(ciphertext, key_size, min_chunks=DEFAULT_MIN_CHUNKS,
                   max_chunks=DEFAULT_MAX_CHUNKS):
    """Return the mean bit distance between chunks of ciphertext, per byte.

    The ciphertext is split into non-overlapping chunks of key_size bytes and
    every pair of the first max_chunks complete chunks is compared. Chunks
    encrypted with the right key size are plain English XOR'd with itself,
    which has fewer differing bits than English XOR'd with two different key
    bytes, so lower scores are more likely.
    """
    if key_size < 1:
        raise InvalidKeySizeRangeError("key_size must be at least 1")
    if min_chunks < 2:
        raise ValueError("min_chunks must be at least 2")
    complete_chunks = [chunk for chunk in chunks(ciphertext[:key_size * max_chunks], key_size)
                       if len(chunk) == key_size]
    if len(complete_chunks) < min_chunks:
        raise KeySizeTooLargeError(
            "ciphertext of {} bytes is too short for key size {} ({} chunks needed)".format(
                len(ciphertext), key_size, min_chunks))
    distances = [bit_hamming_distance(chunk1, chunk2)
                 for chunk1, chunk2 in combinations(complete_chunks, 2)]
    return sum(distances) / len(distances) / key_size


def rank_key_sizes(ciphertext, min_key_size=DEFAULT_MIN_KEY_SIZE,
                   max_key_size=DEFAULT_MAX_KEY_SIZE, min_chunks=DEFAULT_MIN_CHUNKS,
                   max_chunks=DEFAULT_MAX_CHUNKS, workers=None):
    """Return CandidateKeySize tuples for the given range, most likely first.

    Key sizes the ciphertext is too short for are skipped. Ties go to the
    smallest key size.
    """
    if min_key_size < 1 or min_key_size > max_key_size:
        raise InvalidKeySizeRangeError("invalid key size range: {}..{}".format(
            min_key_size, max_key_size))

    def try_key_size(key_size):
        try:
            score = key_size_score(ciphertext, key_size, min_chunks, max_chunks)
        except KeySizeTooLargeError as e:
            logger.debug("skipping key size %d: %s", key_size, e)
            return None
        return CandidateKeySize(key_size, score)

    key_sizes = range(min_key_size, max_key_size + 1)
    if workers:
        with ThreadPool(workers) as pool:
            results = pool.map(try_key_size, key_sizes)
    else:
        results = [try_key_size(key_size) for key_size in key_sizes]
    candidates = sorted((c for c in results if c is not None),
                        key=lambda c: (c.score, c.key_size))
    if not candidates:
        raise NoViableKeySizeError(
            "ciphertext of {} bytes is too short for any key size in {}..{}".format(
                len(ciphertext), min_key_size, max_key_size))
    return candidates


def best_key_size(ciphertext, *args, **kwargs):
    return rank_key_sizes(ciphertext, *args, **kwargs)[0].key_size


def divisors(n):
    return [d for d in range(1, n + 1) if n % d == 0]


def crack_with_key_size(ciphertext, key_size, method=DEFAULT_SCORING_METHOD, workers=None):
    key = crack_xor_columns(transpose(ciphertext, key_size), method=method, workers=workers)
    key = shortest_period(key)
    plaintext = apply_repeating_xor_key(ciphertext, key)
    return CrackResult(key=key, plaintext=plaintext, key_size=key_size,
                       score=score_text(plaintext, method), is_text=is_text(plaintext))


def crack_repeating_xor(ciphertext, min_key_size=DEFAULT_MIN_KEY_SIZE,
                        max_key_size=DEFAULT_MAX_KEY_SIZE, key_size_candidates=1,
                        method=DEFAULT_SCORING_METHOD, min_chunks=DEFAULT_MIN_CHUNKS,
                        max_chunks=DEFAULT_MAX_CHUNKS, workers=None):
    """Recover the key and plaintext of a repeating-key XOR ciphertext.

    The key_size_candidates most likely key sizes are cracked, along with
    every divisor of them that is at least min_key_size. Every multiple of
    the real key size scores about the same in rank_key_sizes, and the
    divisors give the real key size a chance with longer columns. The
    decryption that reads most like English is returned.

    This always returns a best guess. The result's score says how
    English-like the guess is.
    """
    if key_size_candidates < 1:
        raise ValueError("key_size_candidates must be at least 1")
    candidates = rank_key_sizes(ciphertext, min_key_size, max_key_size, min_chunks,
                                max_chunks, workers=workers)[:key_size_candidates]
    key_sizes = []
    for candidate in candidates:
        logger.debug("trying key size %d (distance %.4f) and its divisors",
                     candidate.key_size, candidate.score)
        for key_size in divisors(candidate.key_size):
            if key_size >= min_key_size and key_size not in key_sizes:
                key_sizes.append(key_size)

    results = []
    for key_size in key_sizes:
        result = crack_with_key_size(ciphertext, key_size, method, workers)
        logger.debug("key size %d: key %r, score %.3f%s", key_size, result.key,
                     result.score, "" if result.is_text else " (not text)")
        results.append(result)
    best_result = min(results, key=partial(_result_ranking_key, method=method))
    logger.info("recovered %d-byte key using key size %d", len(best_result.key),
                best_result.key_size)
    return best_result


def _result_ranking_key(result, method):
    return ranking_key(result, method) + (len(result.key),)

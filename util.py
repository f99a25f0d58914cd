import base64

from Cryptodome.Util.strxor import strxor, strxor_c


class LengthMismatchError(ValueError):
    pass


class EmptyKeyError(ValueError):
    pass


class DecodeError(ValueError):
    pass


def xor_bytes(bytes1, bytes2):
    if len(bytes1) != len(bytes2):
        raise LengthMismatchError("inputs must be of equal length ({} != {})".format(
            len(bytes1), len(bytes2)))
    return strxor(bytes1, bytes2)


def xor_single_byte(input_bytes, key_byte):
    return strxor_c(input_bytes, key_byte)


def apply_repeating_xor_key(input_bytes, key):
    """XOR input_bytes with key, repeating the key as many times as needed.

    Applying this function twice with the same key returns the original input.
    """
    if not key:
        raise EmptyKeyError("key must not be empty")
    repeat_count = -(-len(input_bytes) // len(key))
    keystream = (bytes(key) * repeat_count)[:len(input_bytes)]
    return strxor(bytes(input_bytes), keystream)


def bit_hamming_distance(bytes1, bytes2):
    """Return the number of differing bits between two equal-length inputs."""
    return bin(int.from_bytes(xor_bytes(bytes1, bytes2), "big")).count("1")


def chunks(x, chunk_size=16):
    return [x[i : i + chunk_size] for i in range(0, len(x), chunk_size)]


def transpose(input_bytes, key_size):
    """Split input_bytes into key_size columns.

    Column i holds the bytes at positions i, i + key_size, i + 2 * key_size
    and so on. When the length is not a multiple of key_size, the first
    len(input_bytes) % key_size columns are one byte longer than the rest.
    """
    if key_size < 1:
        raise ValueError("key_size must be at least 1")
    input_bytes = bytes(input_bytes)
    return [input_bytes[i::key_size] for i in range(key_size)]


def interleave(columns):
    """Inverse of transpose."""
    result = bytearray(sum(len(c) for c in columns))
    for i, column in enumerate(columns):
        result[i::len(columns)] = column
    return bytes(result)


def shortest_period(key):
    """Return the shortest block that key is an exact repetition of."""
    for period in range(1, len(key)):
        if len(key) % period == 0 and key[:period] * (len(key) // period) == key:
            return key[:period]
    return key


def decode_hex(text):
    try:
        return bytes.fromhex("".join(text.split()))
    except ValueError as e:
        raise DecodeError("invalid hex input: {}".format(e)) from e


def decode_base64(text):
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except ValueError as e:
        raise DecodeError("invalid base64 input: {}".format(e)) from e


def decode_ciphertext(text, encoding):
    if encoding == "base64":
        return decode_base64(text)
    elif encoding == "hex":
        return decode_hex(text)
    else:
        raise ValueError("unknown encoding: {}".format(encoding))


def encode_ciphertext(data, encoding):
    if encoding == "base64":
        return base64.b64encode(data).decode()
    elif encoding == "hex":
        return data.hex()
    else:
        raise ValueError("unknown encoding: {}".format(encoding))


def hex_to_base64(hex_string):
    return base64.b64encode(decode_hex(hex_string))


def pretty_hex_bytes(input_bytes):
    return " ".join(chunks(input_bytes.hex(), 2))

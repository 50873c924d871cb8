# ABOUTME: LZ-string compatible LZW compressor producing URI-safe tokens
# ABOUTME: Matches compressToEncodedURIComponent / decompressFromEncodedURIComponent bit for bit

from typing import Dict, List, Set

URI_SAFE_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+-$"
)
_ALPHABET_INDEX = {char: index for index, char in enumerate(URI_SAFE_ALPHABET)}

BITS_PER_SYMBOL = 6

# Reserved dictionary codes
CHAR_8BIT = 0
CHAR_16BIT = 1
END_OF_STREAM = 2


class DecompressionError(ValueError):
    """Raised when a token is not a valid compressed stream."""


def _to_code_units(text: str) -> str:
    """Split astral characters into UTF-16 surrogate pairs."""
    if all(ord(char) < 0x10000 for char in text):
        return text
    raw = text.encode("utf-16-le", "surrogatepass")
    return "".join(
        chr(int.from_bytes(raw[i : i + 2], "little")) for i in range(0, len(raw), 2)
    )


def _from_code_units(units: str) -> str:
    try:
        return units.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise DecompressionError(f"Unpaired surrogate in decompressed text: {e}") from e


class _BitWriter:
    """Packs bits most-significant first into 6-bit alphabet symbols."""

    def __init__(self):
        self._symbols: List[str] = []
        self._value = 0
        self._count = 0

    def write_bit(self, bit: int) -> None:
        self._value = (self._value << 1) | bit
        self._count += 1
        if self._count == BITS_PER_SYMBOL:
            self._symbols.append(URI_SAFE_ALPHABET[self._value])
            self._value = 0
            self._count = 0

    def write(self, value: int, width: int) -> None:
        """Write ``value`` in ``width`` bits, least-significant bit first."""
        for _ in range(width):
            self.write_bit(value & 1)
            value >>= 1

    def finish(self) -> str:
        # At least one padding bit is always written, so a stream that ends
        # on a symbol boundary gets a whole zero symbol appended.
        emitted = len(self._symbols)
        while len(self._symbols) == emitted:
            self.write_bit(0)
        return "".join(self._symbols)


class _BitReader:
    """Reads bits back out of a token, validating the alphabet up front."""

    def __init__(self, token: str):
        self._values: List[int] = []
        for position, char in enumerate(token):
            try:
                self._values.append(_ALPHABET_INDEX[char])
            except KeyError:
                raise DecompressionError(
                    f"Invalid character {char!r} at position {position}"
                ) from None
        self._next = 0
        self._current = 0
        self._mask = 0

    def read(self, width: int) -> int:
        """Read a ``width``-bit value stored least-significant bit first."""
        value = 0
        for power in range(width):
            if self._mask == 0:
                if self._next >= len(self._values):
                    raise DecompressionError(
                        "Token ends before the end-of-stream marker"
                    )
                self._current = self._values[self._next]
                self._next += 1
                self._mask = 1 << (BITS_PER_SYMBOL - 1)
            if self._current & self._mask:
                value |= 1 << power
            self._mask >>= 1
        return value

    def verify_padding(self) -> None:
        """Check that only zero padding follows the end-of-stream marker."""
        if self._mask == 0:
            if self._values[self._next :] != [0]:
                raise DecompressionError(
                    "Expected a single zero padding symbol after end-of-stream marker"
                )
            return

        if self._current & ((self._mask << 1) - 1):
            raise DecompressionError("Non-zero padding bits after end-of-stream marker")
        if self._next != len(self._values):
            raise DecompressionError("Trailing symbols after end-of-stream marker")


class _Compressor:
    def __init__(self):
        self.writer = _BitWriter()
        self.dictionary: Dict[str, int] = {}
        self.pending_literals: Set[str] = set()
        self.dict_size = 3
        self.num_bits = 2
        # The first literal does not count towards widening
        self.enlarge_in = 2

    def _count_code(self) -> None:
        self.enlarge_in -= 1
        if self.enlarge_in == 0:
            self.enlarge_in = 2**self.num_bits
            self.num_bits += 1

    def _emit(self, phrase: str) -> None:
        if phrase in self.pending_literals:
            char_code = ord(phrase[0])
            if char_code < 256:
                self.writer.write(CHAR_8BIT, self.num_bits)
                self.writer.write(char_code, 8)
            else:
                self.writer.write(CHAR_16BIT, self.num_bits)
                self.writer.write(char_code, 16)
            self._count_code()
            self.pending_literals.discard(phrase)
        else:
            self.writer.write(self.dictionary[phrase], self.num_bits)
        self._count_code()

    def compress(self, units: str) -> str:
        phrase = ""
        for char in units:
            if char not in self.dictionary:
                self.dictionary[char] = self.dict_size
                self.dict_size += 1
                self.pending_literals.add(char)

            extended = phrase + char
            if extended in self.dictionary:
                phrase = extended
                continue

            self._emit(phrase)
            self.dictionary[extended] = self.dict_size
            self.dict_size += 1
            phrase = char

        if phrase:
            self._emit(phrase)

        self.writer.write(END_OF_STREAM, self.num_bits)
        return self.writer.finish()


def compress_to_uri(text: str) -> str:
    """
    Compress text into a URI-safe token.

    Args:
        text: Text to compress; processed as UTF-16 code units

    Returns:
        Token drawn only from URI_SAFE_ALPHABET
    """
    return _Compressor().compress(_to_code_units(text))


def decompress_from_uri(token: str) -> str:
    """
    Decompress a token produced by compress_to_uri.

    Decoding is strict: anything compress_to_uri could not have produced
    (bad symbols, truncation, undefined codes, dirty or extra padding) raises.

    Args:
        token: URI-safe token

    Returns:
        The decompressed text

    Raises:
        DecompressionError: If the token is not a valid compressed stream
    """
    if not token:
        raise DecompressionError("Empty token")

    # Form encoding turns '+' into a space on the way through some proxies
    reader = _BitReader(token.replace(" ", "+"))

    first = reader.read(2)
    if first == END_OF_STREAM:
        reader.verify_padding()
        return ""
    if first == CHAR_8BIT:
        char = chr(reader.read(8))
    elif first == CHAR_16BIT:
        char = chr(reader.read(16))
    else:
        raise DecompressionError(f"Stream must start with a literal, got code {first}")

    # Slots 0-2 mirror the reserved codes
    dictionary: List[str] = ["", "", "", char]
    enlarge_in = 4
    num_bits = 3
    previous = char
    result = [char]

    while True:
        code = reader.read(num_bits)

        if code == END_OF_STREAM:
            reader.verify_padding()
            return _from_code_units("".join(result))

        if code in (CHAR_8BIT, CHAR_16BIT):
            width = 8 if code == CHAR_8BIT else 16
            dictionary.append(chr(reader.read(width)))
            code = len(dictionary) - 1
            enlarge_in -= 1

        if enlarge_in == 0:
            enlarge_in = 2**num_bits
            num_bits += 1

        if code < len(dictionary):
            entry = dictionary[code]
        elif code == len(dictionary):
            entry = previous + previous[0]
        else:
            raise DecompressionError(
                f"Code {code} references undefined dictionary entry "
                f"(dictionary size {len(dictionary)})"
            )
        result.append(entry)

        dictionary.append(previous + entry[0])
        enlarge_in -= 1
        previous = entry

        if enlarge_in == 0:
            enlarge_in = 2**num_bits
            num_bits += 1

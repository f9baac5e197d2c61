"""Morse code encoder.

Converts text to blink descriptors. Each character is looked up in a
static table; its dots and dashes become blinks, a space becomes a word
break and consecutive characters are separated by a letter break::

    "ab c"  ->  . _ l _ . . . w _ . _ .

Characters missing from the table are dropped before framing, so they
never produce a dangling break.
"""

from enum import Enum
from typing import Optional

from ledctl.models import BlinkDescriptor


class MorseSymbol(str, Enum):
    """Morse symbols, valued by their representation in MORSE_TABLE."""

    DOT = "."
    DASH = "_"
    LETTER_BREAK = "l"
    WORD_BREAK = "w"


# Blink timing for each symbol (duty_percent, period_ms)
SIGNALS: dict[MorseSymbol, tuple[float, float]] = {
    MorseSymbol.DOT: (50, 1000),
    MorseSymbol.DASH: (75, 2000),
    MorseSymbol.WORD_BREAK: (0, 3500),
    MorseSymbol.LETTER_BREAK: (0, 500),
}

MORSE_TABLE: dict[str, str] = {
    "a": "._", "b": "_...", "c": "_._.", "d": "_..", "e": ".",
    "f": ".._.", "g": "__.", "h": "....", "i": "..", "j": ".___",
    "k": "_._", "l": "._..", "m": "__", "n": "_.", "o": "___",
    "p": ".__.", "q": "__._", "r": "._.", "s": "...", "t": "_",
    "u": ".._", "v": "..._", "w": ".__", "x": "_.._", "y": "_.__",
    "z": "__..",
    "1": ".____", "2": "..___", "3": "...__", "4": "...._", "5": ".....",
    "6": "_....", "7": "__...", "8": "___..", "9": "____.", "0": "_____",
    ".": "._._._", ",": "__..__", "?": "..__..", "'": ".____.",
    "!": "_._.__", "/": "_.._.", "(": "_.__.", ")": "_.__._",
    ":": "___...", ";": "_._._.", "=": "_..._", "+": "._._.",
    "-": "_...._", '"': "._.._.", "@": ".__._.",
    " ": "w",
}

_BREAKS = (MorseSymbol.LETTER_BREAK, MorseSymbol.WORD_BREAK)


def to_symbols(text: str) -> list[MorseSymbol]:
    """
    Translate text to morse symbols.

    Args:
        text: Input text; letters are matched case-insensitively

    Returns:
        Symbol sequence, never ending in a break
    """
    characters = [c for c in str(text).lower() if c in MORSE_TABLE]

    symbols: list[MorseSymbol] = []
    for index, char in enumerate(characters):
        symbols.extend(MorseSymbol(s) for s in MORSE_TABLE[char])

        following = characters[index + 1] if index + 1 < len(characters) else None
        if char != " " and following is not None and following != " ":
            symbols.append(MorseSymbol.LETTER_BREAK)

    while symbols and symbols[-1] in _BREAKS:
        symbols.pop()
    return symbols


def to_morse(text: str, rate: Optional[float] = None) -> list[BlinkDescriptor]:
    """
    Encode text as a blink sequence.

    Args:
        text: Text to encode
        rate: Speed multiplier applied to every blink (None uses the LED default)

    Returns:
        One BlinkDescriptor per morse symbol

    Example:
        >>> [b.duty_percent for b in to_morse("a")]
        [50.0, 75.0]
    """
    blinks = []
    for symbol in to_symbols(text):
        duty, period = SIGNALS[symbol]
        blinks.append(BlinkDescriptor(rate=rate, duty_percent=duty, period_ms=period))
    return blinks

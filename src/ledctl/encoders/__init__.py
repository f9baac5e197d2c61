"""Encoders converting arbitrary input into blink sequences."""

from .morse import MORSE_TABLE, MorseSymbol, to_morse, to_symbols
from .registry import Encoder, EncoderHandler, EncoderRegistry, normalize_blinks

__all__ = [
    "MORSE_TABLE",
    "Encoder",
    "EncoderHandler",
    "EncoderRegistry",
    "MorseSymbol",
    "normalize_blinks",
    "to_morse",
    "to_symbols",
]

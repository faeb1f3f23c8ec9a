"""
Game Configuration Constants Module

This module defines all game configuration constants for both puzzles.
Board geometry, the fallback puzzles used before the first successful sync,
and the accepted Wordle word list are centralized here.
"""

import os
from typing import FrozenSet, Final, List

# Wordle grid geometry
NUM_ROWS: Final[int] = 6
"""
Number of guess rows (attempts) in a Wordle game.
Type: Final[int] - Immutable to prevent accidental modification
"""

NUM_COLS: Final[int] = 5
"""Letters per guess."""

# Sudoku geometry
BOARD_SIZE: Final[int] = 9
BOX_SIZE: Final[int] = 3

# Target used until today's answer has been synced
FALLBACK_WORD: Final[str] = "WHITE"

# Puzzle shown until today's Sudoku has been synced (0 = empty)
SAMPLE_PUZZLE: Final[List[List[int]]] = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

SAMPLE_SOLUTION: Final[List[List[int]]] = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


# Load word list from the bundled text file
def _load_word_list() -> List[str]:
    """
    Load the accepted guess list from valid_words.txt.

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If valid_words.txt is not found
        ValueError: If word list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    word_file_path = os.path.join(config_dir, 'valid_words.txt')

    try:
        with open(word_file_path, 'r', encoding='utf-8') as f:
            word_list = [line.strip().upper() for line in f if line.strip()]
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {word_file_path}")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    for word in word_list:
        if len(word) != NUM_COLS:
            raise ValueError(f"Word '{word}' is not {NUM_COLS} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return word_list


# Accepted guesses, loaded once and immutable thereafter
WORD_LIST: Final[FrozenSet[str]] = frozenset(_load_word_list())


def validate_word_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly 5 characters
    2. Character validation: Only alphabetic characters allowed
    3. Format validation: Consistent uppercase formatting
    4. Fallback validation: The fallback target is itself a valid guess

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not WORD_LIST:
        raise ValueError("Word list cannot be empty")

    for word in sorted(WORD_LIST):
        if len(word) != NUM_COLS:
            raise ValueError(f"Word '{word}' is not {NUM_COLS} characters long")

        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word '{word}' is not in uppercase format")

    if FALLBACK_WORD not in WORD_LIST:
        raise ValueError(f"Fallback word '{FALLBACK_WORD}' is missing from the word list")

    return True

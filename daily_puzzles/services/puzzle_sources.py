"""
Puzzle Sources

HTTP clients that fetch today's puzzles and turn the pages into validated
snapshots. Sources are plain objects with a ``fetch()`` method, so the sync
controller can be driven by any replacement (tests use in-memory fakes).
"""

import json
from datetime import date
from html.parser import HTMLParser
from typing import Any, Dict, List, Optional

import requests

from ..config.app_config import Config
from ..models.errors import MalformedPuzzleError, PuzzleSourceError
from ..models.sudoku import SudokuSnapshot
from ..models.wordle import WordleSnapshot, is_valid_target

GAME_DATA_MARKER = "window.gameData = "


def _get_page(url: str, label: str, timeout: float, user_agent: str,
              session: Optional[requests.Session] = None) -> str:
    http = session or requests
    try:
        response = http.get(url, headers={'User-Agent': user_agent}, timeout=timeout)
    except requests.RequestException as e:
        raise PuzzleSourceError(f"Failed to fetch {label} page: {e}") from e

    if not response.ok:
        raise PuzzleSourceError(f"{label} responded with HTTP {response.status_code}")
    return response.text


# ----------------------------------------------------------------------
# Sudoku
# ----------------------------------------------------------------------

def extract_game_data_blob(html: str) -> str:
    """Return the JSON object assigned to ``window.gameData`` in the page."""
    start = html.find(GAME_DATA_MARKER)
    if start < 0:
        raise MalformedPuzzleError("window.gameData marker not found")
    after_marker = html[start + len(GAME_DATA_MARKER):]
    end = after_marker.find("</script>")
    if end < 0:
        raise MalformedPuzzleError("Unable to find </script> following window.gameData")
    return after_marker[:end].strip().rstrip(';').strip()


def parse_sudoku_page(html: str, level: str = "hard") -> SudokuSnapshot:
    """Pull one difficulty level out of the NYT Sudoku page."""
    try:
        root = json.loads(extract_game_data_blob(html))
    except json.JSONDecodeError as e:
        raise MalformedPuzzleError(f"Failed to parse gameData JSON: {e}") from e

    block = root.get(level) if isinstance(root, dict) else None
    if not isinstance(block, dict):
        raise MalformedPuzzleError(f"Missing {level} puzzle block")
    puzzle_data = block.get('puzzle_data')
    if not isinstance(puzzle_data, dict):
        raise MalformedPuzzleError("Missing puzzle_data block")

    display_date = root.get('displayDate') or ''
    return SudokuSnapshot.from_payload({
        'displayDate': display_date,
        'printDate': block.get('print_date') or display_date,
        'difficulty': block.get('difficulty') or level.capitalize(),
        'puzzle': puzzle_data.get('puzzle'),
        'solution': puzzle_data.get('solution'),
    })


class NytSudokuSource:
    """Today's hard Sudoku from the New York Times puzzle page."""

    name = "sudoku"

    def __init__(self, url: str = Config.SUDOKU_SOURCE_URL,
                 timeout: float = Config.HTTP_TIMEOUT_SECONDS,
                 user_agent: str = Config.HTTP_USER_AGENT,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session

    def fetch(self) -> SudokuSnapshot:
        html = _get_page(self.url, "NYT Sudoku", self.timeout, self.user_agent, self.session)
        return parse_sudoku_page(html)


# ----------------------------------------------------------------------
# Wordle
# ----------------------------------------------------------------------

class _AnswerTableParser(HTMLParser):
    """
    Collects ``table tbody tr`` rows. For each cell it keeps the visible text
    and the text of any ``display:none`` spans, where the answer is hidden.
    """

    def __init__(self):
        super().__init__()
        self.rows: List[List[Dict[str, Any]]] = []
        self._in_tbody = False
        self._row: Optional[List[Dict[str, Any]]] = None
        self._cell: Optional[Dict[str, Any]] = None
        self._hidden_depth = 0
        self._span_stack: List[bool] = []

    def handle_starttag(self, tag, attrs):
        if tag == 'tbody':
            self._in_tbody = True
        elif tag == 'tr' and self._in_tbody:
            self._row = []
        elif tag == 'td' and self._row is not None:
            self._cell = {'text': [], 'hidden': []}
        elif tag == 'span' and self._cell is not None:
            style = (dict(attrs).get('style') or '').replace(' ', '').lower()
            hidden = 'display:none' in style
            self._span_stack.append(hidden)
            if hidden:
                self._hidden_depth += 1
                self._cell['hidden'].append('')

    def handle_endtag(self, tag):
        if tag == 'span' and self._span_stack:
            if self._span_stack.pop():
                self._hidden_depth -= 1
        elif tag == 'td' and self._cell is not None and self._row is not None:
            self._row.append(self._cell)
            self._cell = None
            self._span_stack = []
            self._hidden_depth = 0
        elif tag == 'tr' and self._row is not None:
            self.rows.append(self._row)
            self._row = None
        elif tag == 'tbody':
            self._in_tbody = False

    def handle_data(self, data):
        if self._cell is None:
            return
        if self._hidden_depth > 0:
            self._cell['hidden'][-1] += data
        else:
            self._cell['text'].append(data)


def _compact(fragments: List[str]) -> str:
    return " ".join(" ".join(fragments).split())


def _hidden_word(raw: str) -> Optional[str]:
    word = "".join(ch for ch in raw if ch.isascii() and ch.isalpha()).upper()
    return word if is_valid_target(word) else None


def parse_wordle_page(html: str, today: Optional[date] = None) -> WordleSnapshot:
    """Find the first answers-table row whose third cell hides a five-letter word."""
    parser = _AnswerTableParser()
    parser.feed(html)
    parser.close()

    for row in parser.rows:
        if len(row) < 3:
            continue
        puzzle_cell, answer_cell = row[1], row[2]
        for hidden in answer_cell['hidden']:
            word = _hidden_word(hidden)
            if word:
                return WordleSnapshot.from_payload({
                    # The page labels the newest row "Today"; the local date is used either way
                    'date': (today or date.today()).isoformat(),
                    'word': word,
                    'puzzle': _compact(puzzle_cell['text']),
                })

    raise MalformedPuzzleError("Could not find Wordle answer on page")


class WordfinderWordleSource:
    """Today's Wordle answer from the Wordfinder answers archive."""

    name = "wordle"

    def __init__(self, url: str = Config.WORDLE_SOURCE_URL,
                 timeout: float = Config.HTTP_TIMEOUT_SECONDS,
                 user_agent: str = Config.HTTP_USER_AGENT,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session

    def fetch(self) -> WordleSnapshot:
        html = _get_page(self.url, "Wordfinder", self.timeout, self.user_agent, self.session)
        return parse_wordle_page(html)

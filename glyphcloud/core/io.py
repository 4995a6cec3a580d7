# glyphcloud/core/io.py
"""
Load word lists from JSON, CSV or plain text.
JSON: list of {"text", "weight", "color"?} objects or [text, weight] pairs.
CSV: header with text, weight and optional color columns.
Text: one word per line, "text<TAB>weight" or "text weight"; blank and # lines skipped.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping
from pathlib import Path

from glyphcloud.core.types import WordItem


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _word_from_obj(obj: object, where: str) -> WordItem:
    if isinstance(obj, Mapping):
        if "text" not in obj:
            raise ValueError(f"{where}: missing 'text'")
        weight = obj.get("weight", obj.get("count", 1))
        return WordItem(text=str(obj["text"]), weight=float(weight), color=obj.get("color") or None)
    if isinstance(obj, (list, tuple)) and len(obj) >= 2:
        color = str(obj[2]) if len(obj) > 2 and obj[2] else None
        return WordItem(text=str(obj[0]), weight=float(obj[1]), color=color)
    if isinstance(obj, str):
        return WordItem(text=obj, weight=1.0)
    raise ValueError(f"{where}: unsupported word entry {obj!r}")


def parse_words_json(text: str) -> list[WordItem]:
    data = json.loads(text)
    if isinstance(data, Mapping):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise ValueError("JSON words must be a list (or an object with a 'words' list)")
    return [_word_from_obj(item, f"item {i}") for i, item in enumerate(data)]


def parse_words_csv(text: str) -> list[WordItem]:
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames or "text" not in [f.strip().lower() for f in reader.fieldnames]:
        raise ValueError("CSV words need a header with a 'text' column")
    out: list[WordItem] = []
    for i, row in enumerate(reader, start=2):
        row = {(k or "").strip().lower(): (v or "").strip() for k, v in row.items()}
        if not row.get("text"):
            continue
        try:
            weight = float(row.get("weight") or 1)
        except ValueError:
            raise ValueError(f"line {i}: weight {row.get('weight')!r} is not a number") from None
        out.append(WordItem(text=row["text"], weight=weight, color=row.get("color") or None))
    return out


def parse_words_text(text: str) -> list[WordItem]:
    """Plain text: 'word<TAB>weight', 'word weight' (last token numeric), or bare 'word' (weight 1)."""
    out: list[WordItem] = []
    for i, raw in enumerate((text or "").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "\t" in line:
            word, _, weight_s = line.rpartition("\t")
        else:
            word, _, weight_s = line.rpartition(" ")
        if not word:
            out.append(WordItem(text=line, weight=1.0))
            continue
        try:
            weight = float(weight_s)
        except ValueError:
            # last token is part of the phrase
            out.append(WordItem(text=line, weight=1.0))
            continue
        out.append(WordItem(text=word.strip(), weight=weight))
    return out


def words_from_frequencies(counts: Mapping[str, float]) -> list[WordItem]:
    """{"word": count} -> WordItems in mapping order."""
    return [WordItem(text=str(k), weight=float(v)) for k, v in counts.items()]


def load_words(path: str | Path, repo_root: Path | None = None) -> list[WordItem]:
    """
    Load words from .json, .csv or any other (plain text) file.
    Raises FileNotFoundError if path is missing, ValueError on malformed content.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Words file not found: {resolved}")
    text = resolved.read_text(encoding="utf-8")
    suffix = resolved.suffix.lower()
    if suffix == ".json":
        return parse_words_json(text)
    if suffix == ".csv":
        return parse_words_csv(text)
    return parse_words_text(text)

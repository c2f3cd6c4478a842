"""
Load article pools exported by the news-fetch service.
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from newsrank.core.article import Article

logger = logging.getLogger(__name__)


class ArticleLoadError(ValueError):
    """Raised when an article file cannot be read at all."""


def _records_from(data: Any, path: Path) -> List[Dict[str, Any]]:
    if isinstance(data, dict) and 'articles' in data:
        data = data['articles']
    if not isinstance(data, list):
        raise ArticleLoadError(f"{path} does not contain a list of articles")
    records = []
    for i, record in enumerate(data):
        if isinstance(record, dict):
            records.append(record)
        else:
            logger.warning(f"Skipping entry {i} in {path}: not an object")
    return records


def _read_jsonl(path: Path) -> List[Any]:
    records = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping line {line_no} in {path}: {e}")
    return records


def load_articles(path: str, now: Optional[datetime] = None) -> List[Article]:
    """
    Read articles from a JSON, JSON Lines or YAML file.

    Args:
        path: File path (.json, .jsonl or .yaml/.yml)
        now: Timestamp for records without a publication time

    Returns:
        Articles in file order

    Raises:
        ArticleLoadError: if the file is missing, unparseable or of an unknown type
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()

    try:
        if suffix == '.jsonl':
            data = _read_jsonl(file_path)
        elif suffix == '.json':
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        elif suffix in ('.yaml', '.yml'):
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        else:
            raise ArticleLoadError(f"Unsupported article file format: {suffix or path}")
    except OSError as e:
        raise ArticleLoadError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ArticleLoadError(f"Cannot parse {path}: {e}") from e

    articles = [Article.from_dict(record, now=now) for record in _records_from(data, file_path)]
    logger.info(f"Loaded {len(articles)} articles from {path}")
    return articles

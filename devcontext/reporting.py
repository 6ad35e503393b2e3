"""Tabular and chart reports over context payloads."""

import logging
import os
from typing import Dict, Iterable

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    'url', 'title', 'depth', 'codeBlockCount', 'type', 'sections',
    'author', 'averageReactions', 'quality', 'sentiment', 'expertCount'
]


def results_to_frame(payloads: Iterable[Dict]) -> pd.DataFrame:
    """Flatten successful analyze_article payloads into one row per article.

    Error payloads are skipped.
    """
    rows = []
    for payload in payloads:
        if payload.get('type') != 'success':
            continue
        data = payload['data']
        rows.append({
            'url': data['metadata']['url'],
            'title': data['article']['title'],
            'depth': data['technical']['depth'],
            'codeBlockCount': data['technical']['codeBlockCount'],
            'type': data['content']['type'],
            'sections': len(data['content']['structure']['sections']),
            'author': data['author']['name'],
            'averageReactions': data['author']['credibility']['averageReactions'],
            'quality': data['discussion']['quality'],
            'sentiment': data['discussion']['sentiment'],
            'expertCount': data['discussion']['expertContributions']['count'],
        })

    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def save_csv(frame: pd.DataFrame, output_path: str):
    """Write a results frame to CSV."""
    frame.to_csv(output_path, index=False)
    logger.info(f"Saved {len(frame)} rows to {output_path}")


def plot_tag_distribution(top_tags: Dict[str, int], output_path: str, title: str = None):
    """Bar chart of an author's tag counts, most used first.

    Args:
        top_tags: Mapping of tag to article count
        output_path: PNG path to write
        title: Chart title
    """
    counts = pd.Series(top_tags, dtype='int64').sort_values(ascending=False, kind='stable')

    plt.figure(figsize=(12, 6))
    plt.bar(counts.index, counts.values)
    plt.title(title or 'Tag Distribution')
    plt.xlabel('Tag')
    plt.ylabel('Articles')
    plt.xticks(rotation=45, ha='right')
    plt.tight_layout()
    plt.savefig(output_path)
    plt.close()
    logger.info(f"Saved {os.path.basename(output_path)}")
